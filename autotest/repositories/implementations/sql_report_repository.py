from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy.orm import Session

from autotest.models.database import ReportModel
from autotest.models.schemas import ReportOut
from autotest.repositories.interfaces.report_repository import IReportRepository


class SQLReportRepository(IReportRepository):
    """SQLAlchemy implementation of report repository"""

    def __init__(self, db: Session):
        self.db = db

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
        db_report = ReportModel(
            name=name,
            description=description or "",
            type=type,
            format=format,
            schedule=schedule,
            filters=filters or {},
            created_by=created_by,
        )
        self.db.add(db_report)
        self.db.commit()
        self.db.refresh(db_report)
        return ReportOut.model_validate(db_report)

    async def list_for_user(self, user_id: int) -> List[ReportOut]:
        reports = (
            self.db.query(ReportModel)
            .filter(ReportModel.created_by == user_id)
            .order_by(ReportModel.created_at.desc(), ReportModel.id.desc())
            .all()
        )
        return [ReportOut.model_validate(r) for r in reports]

    async def get_for_user(self, report_id: int, user_id: int) -> Optional[ReportOut]:
        db_report = (
            self.db.query(ReportModel)
            .filter(ReportModel.id == report_id, ReportModel.created_by == user_id)
            .first()
        )
        if db_report:
            return ReportOut.model_validate(db_report)
        return None

    async def mark_generated(self, report_id: int) -> Optional[ReportOut]:
        db_report = self.db.query(ReportModel).filter(ReportModel.id == report_id).first()
        if not db_report:
            return None
        db_report.last_generated = datetime.utcnow()
        self.db.commit()
        self.db.refresh(db_report)
        return ReportOut.model_validate(db_report)
