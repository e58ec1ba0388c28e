from abc import ABC, abstractmethod
from typing import Optional


class IAIService(ABC):
    """Interface for text-completion LLM providers.

    Implementations raise ``AIQuotaExceededError`` for provider quota/rate
    limits, ``AIServiceUnavailableError`` when not configured, and
    ``AIServiceError`` for any other failure.
    """

    model_name: str = "unknown"

    @property
    @abstractmethod
    def is_configured(self) -> bool:
        """Whether credentials are present"""
        pass

    @abstractmethod
    async def generate_text(
        self,
        prompt: str,
        system: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 1000,
    ) -> str:
        """Return the raw completion text for a prompt"""
        pass
