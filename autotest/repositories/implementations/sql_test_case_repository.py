from datetime import datetime
from typing import Any, Dict, List, Optional

from sqlalchemy import func
from sqlalchemy.orm import Session

from autotest.models.database import AuditLogModel, ProjectModel, TestCaseModel
from autotest.models.schemas import TestCaseOut
from autotest.repositories.interfaces.test_case_repository import ITestCaseRepository


def _to_schema(test_case: TestCaseModel, project_name: Optional[str] = None) -> TestCaseOut:
    return TestCaseOut(
        id=test_case.id,
        project_id=test_case.project_id,
        project_name=project_name,
        name=test_case.name,
        type=test_case.type,
        content=test_case.content,
        input_source=test_case.input_source,
        ai_model_used=test_case.ai_model_used,
        created_by=test_case.created_by,
        metadata=test_case.metadata_ or {},
        created_at=test_case.created_at,
        updated_at=test_case.updated_at,
    )


class SQLTestCaseRepository(ITestCaseRepository):
    """SQLAlchemy implementation of test case repository"""

    def __init__(self, db: Session):
        self.db = db

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
        """Create a new test case"""
        db_test_case = TestCaseModel(
            project_id=project_id,
            name=name,
            type=type,
            content=content,
            input_source=input_source,
            ai_model_used=ai_model_used,
            created_by=created_by,
            metadata_=metadata or {},
        )
        self.db.add(db_test_case)
        if project_id is not None:
            # Adding a test case counts as activity on its project
            self.db.query(ProjectModel).filter(ProjectModel.id == project_id).update(
                {ProjectModel.updated_at: datetime.utcnow()}, synchronize_session=False
            )
        self.db.commit()
        self.db.refresh(db_test_case)
        return _to_schema(db_test_case)

    async def get_for_user(self, test_case_id: int, user_id: int) -> Optional[TestCaseOut]:
        row = (
            self.db.query(TestCaseModel, ProjectModel.name)
            .outerjoin(ProjectModel, TestCaseModel.project_id == ProjectModel.id)
            .filter(TestCaseModel.id == test_case_id, TestCaseModel.created_by == user_id)
            .first()
        )
        if row:
            return _to_schema(row[0], row[1])
        return None

    async def list_for_user(self, user_id: int, limit: Optional[int] = None) -> List[TestCaseOut]:
        query = (
            self.db.query(TestCaseModel, ProjectModel.name)
            .outerjoin(ProjectModel, TestCaseModel.project_id == ProjectModel.id)
            .filter(TestCaseModel.created_by == user_id)
            .order_by(TestCaseModel.created_at.desc(), TestCaseModel.id.desc())
        )
        if limit:
            query = query.limit(limit)
        return [_to_schema(test_case, project_name) for test_case, project_name in query.all()]

    async def count_for_user(self, user_id: int) -> int:
        return (
            self.db.query(func.count(TestCaseModel.id)).filter(TestCaseModel.created_by == user_id).scalar() or 0
        )

    async def content_bytes_for_user(self, user_id: int) -> int:
        contents = self.db.query(TestCaseModel.content).filter(TestCaseModel.created_by == user_id).all()
        return sum(len((content or "").encode("utf-8")) for (content,) in contents)

    async def log_audit(
        self,
        user_id: int,
        action: str,
        resource_type: Optional[str] = None,
        resource_id: Optional[str] = None,
        ip_address: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        self.db.add(
            AuditLogModel(
                user_id=user_id,
                action=action,
                resource_type=resource_type,
                resource_id=resource_id,
                ip_address=ip_address,
                user_agent=user_agent,
            )
        )
        self.db.commit()
