from abc import ABC, abstractmethod
from typing import Any, Dict, List, Optional

from autotest.models.schemas import ReportOut


class IReportRepository(ABC):
    """Interface for report definition storage"""

    @abstractmethod
    async def create(
        self,
        created_by: int,
        name: str,
        type: str,
        format: str,
        schedule: str,
        description: str = "",
        filters: Optional[Dict[str, Any]] = None,
    ) -> ReportOut:
        pass

    @abstractmethod
    async def list_for_user(self, user_id: int) -> List[ReportOut]:
        pass

    @abstractmethod
    async def get_for_user(self, report_id: int, user_id: int) -> Optional[ReportOut]:
        pass

    @abstractmethod
    async def mark_generated(self, report_id: int) -> Optional[ReportOut]:
        pass
