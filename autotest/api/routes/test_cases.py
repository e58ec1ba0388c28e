from fastapi import APIRouter, Depends, Request, status
import structlog

from autotest.models.schemas import (
    GenerateTestsRequest, GenerateTestsResponse,
    TestCaseCreate, TestCaseCreateResponse, TestCaseListResponse,
    TokenUser,
)
from autotest.services.test_case_service import TestCaseService
from autotest.core.dependencies import get_test_case_service
from autotest.core.security import get_current_user

logger = structlog.get_logger()

router = APIRouter(tags=["test-cases"])


def client_address(request: Request) -> str:
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "unknown"


@router.get("/test-cases", response_model=TestCaseListResponse)
async def list_test_cases(
    current_user: TokenUser = Depends(get_current_user),
    service: TestCaseService = Depends(get_test_case_service)
):
    """List the caller's test cases, newest first"""
    test_cases = await service.list_test_cases(current_user.id)
    return TestCaseListResponse(test_cases=test_cases)


@router.post("/test-cases", response_model=TestCaseCreateResponse, status_code=status.HTTP_201_CREATED)
async def create_test_case(
    request: TestCaseCreate,
    current_user: TokenUser = Depends(get_current_user),
    service: TestCaseService = Depends(get_test_case_service)
):
    test_case = await service.create_test_case(current_user, request)
    return TestCaseCreateResponse(test_case=test_case, message="Test case created successfully")


@router.post("/generate-tests", response_model=GenerateTestsResponse)
async def generate_tests(
    payload: GenerateTestsRequest,
    request: Request,
    current_user: TokenUser = Depends(get_current_user),
    service: TestCaseService = Depends(get_test_case_service)
):
    """Generate test artifacts with the configured model, falling back to templates"""
    response = await service.generate_tests(
        current_user,
        payload,
        ip_address=client_address(request),
        user_agent=request.headers.get("user-agent"),
    )
    logger.info(
        "Tests generated",
        user_id=current_user.id,
        count=len(response.tests),
        fallback_used=response.fallback_used,
    )
    return response
