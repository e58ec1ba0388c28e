from typing import Optional

from fastapi import APIRouter, Depends, Query

from autotest.models.schemas import AnalyticsResponse, DashboardResponse, ResultsResponse, TokenUser
from autotest.services.analytics_service import AnalyticsService
from autotest.core.dependencies import get_analytics_service
from autotest.core.security import get_current_user

router = APIRouter(tags=["results"])


@router.get("/results", response_model=ResultsResponse)
async def get_results(
    time_range: Optional[str] = Query(None, alias="timeRange"),
    environment: Optional[str] = None,
    test_type: Optional[str] = Query(None, alias="testType"),
    current_user: TokenUser = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service)
):
    results = await service.results(current_user.id, time_range, environment, test_type)
    return ResultsResponse(results=results)


@router.get("/analytics", response_model=AnalyticsResponse)
async def get_analytics(
    time_range: Optional[str] = Query(None, alias="timeRange"),
    environment: Optional[str] = None,
    test_type: Optional[str] = Query(None, alias="testType"),
    current_user: TokenUser = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service)
):
    """Pass rate, durations, trend and distribution over the selected window"""
    analytics = await service.analytics(current_user.id, time_range, environment, test_type)
    return AnalyticsResponse(analytics=analytics)


@router.get("/dashboard/stats", response_model=DashboardResponse)
async def get_dashboard_stats(
    current_user: TokenUser = Depends(get_current_user),
    service: AnalyticsService = Depends(get_analytics_service)
):
    return await service.dashboard(current_user.id)
