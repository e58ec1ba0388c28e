from fastapi import APIRouter, Depends, status
import structlog

from autotest.models.schemas import ExecuteTestsRequest, ExecuteTestsResponse, ExecutionListResponse, TokenUser
from autotest.services.execution_service import ExecutionService
from autotest.core.dependencies import get_execution_service
from autotest.core.security import get_current_user

logger = structlog.get_logger()

router = APIRouter(prefix="/executions", tags=["executions"])


@router.get("", response_model=ExecutionListResponse)
async def list_executions(
    current_user: TokenUser = Depends(get_current_user),
    service: ExecutionService = Depends(get_execution_service)
):
    executions = await service.list_executions(current_user.id)
    return ExecutionListResponse(executions=executions)


@router.post("", response_model=ExecuteTestsResponse, status_code=status.HTTP_201_CREATED)
async def execute_tests(
    request: ExecuteTestsRequest,
    current_user: TokenUser = Depends(get_current_user),
    service: ExecutionService = Depends(get_execution_service)
):
    """Run each selected test case once in the requested environment"""
    executions = await service.execute_tests(current_user.id, request)
    return ExecuteTestsResponse(
        executions=executions,
        message=f"Executed {len(executions)} test(s) in {request.environment}",
    )
