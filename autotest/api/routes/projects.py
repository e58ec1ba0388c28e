from fastapi import APIRouter, Depends, status
import structlog

from autotest.models.schemas import ProjectCreate, ProjectCreateResponse, ProjectListResponse, TokenUser
from autotest.services.project_service import ProjectService
from autotest.core.dependencies import get_project_service
from autotest.core.security import get_current_user

logger = structlog.get_logger()

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    current_user: TokenUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    """List the caller's projects, most recently updated first"""
    projects = await service.list_projects(current_user.id)
    return ProjectListResponse(projects=projects)


@router.post("", response_model=ProjectCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_project(
    request: ProjectCreate,
    current_user: TokenUser = Depends(get_current_user),
    service: ProjectService = Depends(get_project_service)
):
    project = await service.create_project(current_user.id, request)
    return ProjectCreateResponse(project=project, message="Project created successfully")
