from abc import ABC, abstractmethod
from typing import Any, Optional

from autotest.models.database import UserModel


class IUserRepository(ABC):
    """Interface for user account storage"""

    @abstractmethod
    async def get_by_id(self, user_id: int) -> Optional[UserModel]:
        pass

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[UserModel]:
        pass

    @abstractmethod
    async def create(
        self, email: str, name: str, password_hash: str, role: str = "user", plan: str = "free"
    ) -> UserModel:
        pass

    @abstractmethod
    async def update(self, user_id: int, **fields: Any) -> Optional[UserModel]:
        pass
