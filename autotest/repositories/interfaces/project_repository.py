from abc import ABC, abstractmethod
from typing import List, Optional

from autotest.models.schemas import ProjectOut


class IProjectRepository(ABC):
    """Interface for project storage"""

    @abstractmethod
    async def create(self, user_id: int, name: str, description: str = "") -> ProjectOut:
        pass

    @abstractmethod
    async def get_for_user(self, project_id: int, user_id: int) -> Optional[ProjectOut]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: int) -> List[ProjectOut]:
        """Projects with test counts and distinct test types, most recently updated first"""
        pass

    @abstractmethod
    async def count_for_user(self, user_id: int) -> int:
        pass
