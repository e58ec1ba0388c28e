from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from autotest.models.database import ProjectModel, TestCaseModel, TestExecutionModel
from autotest.models.schemas import ExecutionOut
from autotest.repositories.interfaces.execution_repository import IExecutionRepository


def _to_schema(
    execution: TestExecutionModel,
    test_name: Optional[str] = None,
    test_type: Optional[str] = None,
    project_name: Optional[str] = None,
) -> ExecutionOut:
    return ExecutionOut(
        id=execution.id,
        test_case_id=execution.test_case_id,
        status=execution.status,
        duration=execution.duration or 0,
        environment=execution.environment,
        triggered_by=execution.triggered_by,
        logs=execution.logs,
        created_at=execution.created_at,
        test_name=test_name,
        test_type=test_type,
        project_name=project_name,
    )


class SQLExecutionRepository(IExecutionRepository):
    """SQLAlchemy implementation of execution repository"""

    def __init__(self, db: Session):
        self.db = db

    async def create(
        self,
        test_case_id: int,
        status: str,
        duration: int,
        environment: Optional[str],
        triggered_by: int,
        logs: Optional[str],
    ) -> ExecutionOut:
        db_execution = TestExecutionModel(
            test_case_id=test_case_id,
            status=status,
            duration=duration,
            environment=environment,
            triggered_by=triggered_by,
            logs=logs,
        )
        self.db.add(db_execution)
        self.db.commit()
        self.db.refresh(db_execution)

        test_case = self.db.query(TestCaseModel).filter(TestCaseModel.id == test_case_id).first()
        return _to_schema(
            db_execution,
            test_name=test_case.name if test_case else None,
            test_type=test_case.type if test_case else None,
        )

    async def list_for_user(
        self,
        user_id: int,
        since: Optional[datetime] = None,
        environment: Optional[str] = None,
        test_type: Optional[str] = None,
        limit: Optional[int] = None,
    ) -> List[ExecutionOut]:
        query = (
            self.db.query(TestExecutionModel, TestCaseModel.name, TestCaseModel.type, ProjectModel.name)
            .join(TestCaseModel, TestExecutionModel.test_case_id == TestCaseModel.id)
            .outerjoin(ProjectModel, TestCaseModel.project_id == ProjectModel.id)
            .filter(TestCaseModel.created_by == user_id)
        )
        if since is not None:
            query = query.filter(TestExecutionModel.created_at >= since)
        if environment:
            query = query.filter(TestExecutionModel.environment == environment)
        if test_type:
            query = query.filter(TestCaseModel.type == test_type)

        query = query.order_by(TestExecutionModel.created_at.desc(), TestExecutionModel.id.desc())
        if limit:
            query = query.limit(limit)

        return [
            _to_schema(execution, test_name, type_, project_name)
            for execution, test_name, type_, project_name in query.all()
        ]
