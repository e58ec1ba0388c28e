from abc import ABC, abstractmethod
from typing import List, Optional

from autotest.models.database import TeamMemberModel
from autotest.models.schemas import TeamMemberOut


class ITeamRepository(ABC):
    """Interface for team membership storage"""

    @abstractmethod
    async def list_members(self, owner_id: int) -> List[TeamMemberOut]:
        """The owner first, then members, with project and test counts"""
        pass

    @abstractmethod
    async def count_members(self, owner_id: int) -> int:
        pass

    @abstractmethod
    async def get_membership(self, owner_id: int, user_id: int) -> Optional[TeamMemberModel]:
        pass

    @abstractmethod
    async def add_member(self, owner_id: int, user_id: int, role: str, status: str) -> TeamMemberModel:
        pass

    @abstractmethod
    async def update_role(self, owner_id: int, user_id: int, role: str) -> Optional[TeamMemberModel]:
        pass

    @abstractmethod
    async def remove_member(self, owner_id: int, user_id: int) -> bool:
        pass
