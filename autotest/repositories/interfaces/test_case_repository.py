from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from autotest.models.schemas import TestCaseOut


class ITestCaseRepository(ABC):
    """Interface for test case repository operations"""

    @abstractmethod
    async def create(
        self,
        created_by: int,
        name: str,
        type: str,
        content: str,
        project_id: Optional[int] = None,
        input_source: Optional[str] = None,
        ai_model_used: Optional[str] = None,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> TestCaseOut:
        pass

    @abstractmethod
    async def get_for_user(self, test_case_id: int, user_id: int) -> Optional[TestCaseOut]:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: int, limit: Optional[int] = None) -> List[TestCaseOut]:
        """Newest first, with the owning project's name"""
        pass

    @abstractmethod
    async def count_for_user(self, user_id: int) -> int:
        """Number of test cases created by the user; this is the plan usage"""
        pass

    @abstractmethod
    async def content_bytes_for_user(self, user_id: int) -> int:
        pass

    @abstractmethod
    async def log_audit(
        self,
        user_id: int,
        action: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        pass
