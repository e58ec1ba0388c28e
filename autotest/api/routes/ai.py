from fastapi import APIRouter, Depends
import structlog

from autotest.models.schemas import FailureAnalysisRequest, FailureAnalysisResponse, TokenUser
from autotest.services.test_case_service import TestCaseService
from autotest.core.dependencies import get_test_case_service
from autotest.core.security import get_current_user

logger = structlog.get_logger()

router = APIRouter(prefix="/ai", tags=["ai"])


@router.post("/analyze", response_model=FailureAnalysisResponse)
async def analyze_failure(
    request: FailureAnalysisRequest,
    current_user: TokenUser = Depends(get_current_user),
    service: TestCaseService = Depends(get_test_case_service)
):
    """Ask the model why a test failed and how to fix it"""
    logger.info("Analyzing test failure", user_id=current_user.id, test_type=request.test_type.value)
    return await service.analyze_failure(request)
