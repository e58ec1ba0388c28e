from typing import Dict, List, Optional, Set

from sqlalchemy import func
from sqlalchemy.orm import Session

from autotest.models.database import ProjectModel, TestCaseModel
from autotest.models.schemas import ProjectOut
from autotest.repositories.interfaces.project_repository import IProjectRepository


class SQLProjectRepository(IProjectRepository):
    """SQLAlchemy implementation of project repository"""

    def __init__(self, db: Session):
        self.db = db

    def _to_schema(self, project: ProjectModel, test_count: int = 0, test_types: Optional[Set[str]] = None) -> ProjectOut:
        out = ProjectOut.model_validate(project)
        out.test_count = test_count
        out.test_types = sorted(test_types or [])
        return out

    async def create(self, user_id: int, name: str, description: str = "") -> ProjectOut:
        db_project = ProjectModel(name=name, description=description or "", user_id=user_id)
        self.db.add(db_project)
        self.db.commit()
        self.db.refresh(db_project)
        return self._to_schema(db_project)

    async def get_for_user(self, project_id: int, user_id: int) -> Optional[ProjectOut]:
        db_project = (
            self.db.query(ProjectModel)
            .filter(ProjectModel.id == project_id, ProjectModel.user_id == user_id)
            .first()
        )
        if db_project:
            return self._to_schema(db_project)
        return None

    async def list_for_user(self, user_id: int) -> List[ProjectOut]:
        projects = (
            self.db.query(ProjectModel)
            .filter(ProjectModel.user_id == user_id)
            .order_by(ProjectModel.updated_at.desc(), ProjectModel.id.desc())
            .all()
        )
        if not projects:
            return []

        rows = (
            self.db.query(TestCaseModel.project_id, TestCaseModel.type, func.count(TestCaseModel.id))
            .filter(TestCaseModel.project_id.in_([p.id for p in projects]))
            .group_by(TestCaseModel.project_id, TestCaseModel.type)
            .all()
        )
        counts: Dict[int, int] = {}
        types: Dict[int, Set[str]] = {}
        for project_id, test_type, count in rows:
            counts[project_id] = counts.get(project_id, 0) + count
            types.setdefault(project_id, set()).add(test_type)

        return [self._to_schema(p, counts.get(p.id, 0), types.get(p.id)) for p in projects]

    async def count_for_user(self, user_id: int) -> int:
        return self.db.query(func.count(ProjectModel.id)).filter(ProjectModel.user_id == user_id).scalar() or 0
