import asyncio
from typing import Optional

import google.generativeai as genai
from google.api_core import exceptions as google_exceptions
import structlog

from autotest.config.settings import settings
from autotest.core.exceptions import (
    AIQuotaExceededError,
    AIServiceError,
    AIServiceUnavailableError,
)
from autotest.repositories.interfaces.ai_service import IAIService

logger = structlog.get_logger()


def _looks_like_quota_error(error: Exception) -> bool:
    message = str(error).lower()
    return "quota" in message or "429" in message or "rate limit" in message


class GeminiService(IAIService):
    """Google Gemini implementation of the AI service."""

    def __init__(self, api_key: Optional[str] = None, model_name: Optional[str] = None) -> None:
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model_name = model_name or settings.gemini_model
        if self.api_key:
            genai.configure(api_key=self.api_key)

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    async def generate_text(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 1000,
    ) -> str:
        if not self.is_configured:
            raise AIServiceUnavailableError(
                "Gemini API key not found. Set GEMINI_API_KEY in your environment."
            )

        def sync_call():
            model = genai.GenerativeModel(self.model_name, system_instruction=system)
            response = model.generate_content(
                prompt,
                generation_config=genai.types.GenerationConfig(
                    max_output_tokens=max_tokens,
                    temperature=temperature,
                ),
            )
            return getattr(response, "text", None) or ""

        try:
            return await asyncio.get_event_loop().run_in_executor(None, sync_call)
        except google_exceptions.ResourceExhausted as e:
            logger.warning("Gemini quota exceeded", model=self.model_name, error=str(e))
            raise AIQuotaExceededError(str(e)) from e
        except Exception as e:
            if _looks_like_quota_error(e):
                logger.warning("Gemini rate limited", model=self.model_name, error=str(e))
                raise AIQuotaExceededError(str(e)) from e
            logger.error("Gemini generate_text failed", model=self.model_name, error=str(e))
            raise AIServiceError(str(e)) from e
