from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional

from autotest.models.schemas import ExecutionOut


class IExecutionRepository(ABC):
    """Interface for test execution storage"""

    @abstractmethod
    async def create(
        self,
        test_case_id: int,
        status: str,
        duration: int,
        environment: Optional[str],
        triggered_by: int,
        logs: Optional[str],
    ) -> ExecutionOut:
        pass

    @abstractmethod
    async def list_for_user(
        self,
        user_id: int,
        since: Optional[datetime] = None,
        environment: Optional[str] = None,
        test_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ExecutionOut]:
        """Executions of the user's test cases, newest first"""
        pass
