from pydantic_settings import BaseSettings
from typing import Optional


class Settings(BaseSettings):
    # API Configuration
    debug: bool = False
    environment: str = "development"
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api"

    # AI provider selection: "gemini" or "openai"
    ai_provider: str = "gemini"

    # Gemini Configuration (secrets come from environment)
    gemini_api_key: Optional[str] = None
    gemini_model: str = "gemini-1.5-flash"

    # OpenAI-compatible Configuration (optional)
    openai_api_key: Optional[str] = None
    openai_base_url: str = "https://models.github.ai/inference"
    openai_model: str = "openai/gpt-4.1"

    # Generation limits
    # Requests above this size are rejected before any model call.
    max_input_chars: int = 5000
    # Only a prefix of the input is stored with each generated test case.
    stored_input_chars: int = 500

    # File uploads
    max_upload_file_bytes: int = 10 * 1024 * 1024
    max_upload_total_bytes: int = 50 * 1024 * 1024

    # Database Configuration
    database_url: str = "sqlite:///./data/autotest.db"

    # Security
    secret_key: str = "change-me-in-production"
    algorithm: str = "HS256"
    access_token_expire_minutes: int = 60 * 24 * 7

    # Logging
    log_level: str = "INFO"

    class Config:
        env_file = ".env"
        case_sensitive = False


# Global settings instance
settings = Settings()
