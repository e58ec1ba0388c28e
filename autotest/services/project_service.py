from typing import List

import structlog

from autotest.core.exceptions import ValidationError
from autotest.models.schemas import ProjectCreate, ProjectOut
from autotest.repositories.interfaces.project_repository import IProjectRepository

logger = structlog.get_logger()


class ProjectService:
    def __init__(self, project_repository: IProjectRepository):
        self.project_repository = project_repository

    async def list_projects(self, user_id: int) -> List[ProjectOut]:
        return await self.project_repository.list_for_user(user_id)

    async def create_project(self, user_id: int, request: ProjectCreate) -> ProjectOut:
        name = (request.name or "").strip()
        if not name:
            raise ValidationError("Project name is required")
        project = await self.project_repository.create(user_id, name, (request.description or "").strip())
        logger.info("Project created", user_id=user_id, project_id=project.id)
        return project
