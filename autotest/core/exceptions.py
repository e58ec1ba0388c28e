"""
Application exception hierarchy.

Services raise these types; ``main.py`` registers a single handler that turns
them into ``{"error": ..., **extra}`` JSON bodies with the matching status code.
"""
from typing import Any, Dict, Optional


class AppError(Exception):
    status_code: int = 500

    def __init__(self, message: str, extra: Optional[Dict[str, Any]] = None) -> None:
        self.message = message
        self.extra = extra or {}
        super().__init__(message)


class AuthError(AppError):
    """Missing, invalid or expired bearer token, or bad credentials."""

    status_code = 401


class ValidationError(AppError):
    """Missing or oversized request fields."""

    status_code = 400


class NotFoundError(AppError):
    status_code = 404

    def __init__(self, resource: str, resource_id: Any = None) -> None:
        self.resource = resource
        self.resource_id = resource_id
        super().__init__(f"{resource} not found")


class ConflictError(AppError):
    status_code = 409


class QuotaExceededError(AppError):
    """Plan test-generation limit reached.

    ``limit`` and ``current`` are surfaced to the caller so the dashboard can
    offer an upgrade.
    """

    status_code = 429

    def __init__(self, message: str, limit: int, current: int) -> None:
        super().__init__(message, extra={"limit": limit, "current": current})
        self.limit = limit
        self.current = current


class GenerationError(AppError):
    """The pipeline could not produce any artifact, not even a template."""

    status_code = 500

    def __init__(self, message: str) -> None:
        super().__init__(message, extra={"fallbackUsed": True})


class AIServiceError(Exception):
    """Raised by AI provider implementations when a completion call fails."""


class AIQuotaExceededError(AIServiceError):
    """Provider-side quota or rate limit hit (HTTP 429 / resource exhausted)."""


class AIServiceUnavailableError(AIServiceError):
    """Provider is not configured (no API key)."""
