from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from autotest.models.database import UserSettingsModel, UserTwoFactorModel


class ISettingsRepository(ABC):
    """Interface for per-user settings and two-factor secrets"""

    @abstractmethod
    async def get(self, user_id: int) -> Optional[UserSettingsModel]:
        pass

    @abstractmethod
    async def create(self, user_id: int, sections: Dict[str, Dict[str, Any]]) -> UserSettingsModel:
        """``sections`` maps profile/notifications/security/preferences to their values"""
        pass

    @abstractmethod
    async def update(self, user_id: int, sections: Dict[str, Dict[str, Any]]) -> UserSettingsModel:
        """Replace only the sections present in ``sections``"""
        pass

    @abstractmethod
    async def save_two_factor(self, user_id: int, secret: str, backup_codes: List[str]) -> UserTwoFactorModel:
        pass
