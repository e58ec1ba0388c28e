import asyncio
from typing import Optional

from openai import OpenAI, RateLimitError
import structlog

from autotest.config.settings import settings
from autotest.core.exceptions import (
    AIQuotaExceededError,
    AIServiceError,
    AIServiceUnavailableError,
)
from autotest.repositories.interfaces.ai_service import IAIService

logger = structlog.get_logger()


class OpenAIService(IAIService):
    """OpenAI-compatible chat completions implementation (GitHub Models by default)"""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None):
        self.api_key = api_key if api_key is not None else settings.openai_api_key
        self.model_name = model_name or settings.openai_model
        self.client: Optional[OpenAI] = None
        if self.api_key:
            self.client = OpenAI(base_url=settings.openai_base_url, api_key=self.api_key)

    @property
    def is_configured(self) -> bool:
        return self.client is not None

    async def generate_text(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 1000,
    ) -> str:
        if self.client is None:
            raise AIServiceUnavailableError(
                "OpenAI API key not found. Set OPENAI_API_KEY in your environment."
            )
        client = self.client

        def sync_call():
            messages = []
            if system:
                messages.append({"role": "system", "content": system})
            messages.append({"role": "user", "content": prompt})
            response = client.chat.completions.create(
                messages=messages,
                temperature=temperature,
                max_tokens=max_tokens,
                model=self.model_name,
            )
            if not response.choices:
                return ""
            return response.choices[0].message.content or ""

        try:
            return await asyncio.get_event_loop().run_in_executor(None, sync_call)
        except RateLimitError as e:
            logger.warning("OpenAI rate limit hit", model=self.model_name, error=str(e))
            raise AIQuotaExceededError(str(e)) from e
        except Exception as e:
            logger.error("OpenAI generate_text failed", model=self.model_name, error=str(e))
            raise AIServiceError(str(e)) from e
