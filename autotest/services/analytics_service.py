import re
from collections import Counter, OrderedDict
from datetime import datetime, timedelta
from typing import List, Optional

from autotest.core.exceptions import NotFoundError, ValidationError
from autotest.core.plans import get_plan_limits
from autotest.models.schemas import (
    ActivityItem,
    Analytics,
    DashboardResponse,
    DashboardStats,
    EnvironmentStat,
    ExecutionOut,
    ExecutionStatus,
    TrendPoint,
    TypeSlice,
)
from autotest.repositories.interfaces.execution_repository import IExecutionRepository
from autotest.repositories.interfaces.project_repository import IProjectRepository
from autotest.repositories.interfaces.test_case_repository import ITestCaseRepository
from autotest.repositories.interfaces.user_repository import IUserRepository

DEFAULT_TIME_RANGE = "7d"
TREND_DAYS = 7
RECENT_ACTIVITY = 10
CHART_COLORS = ["#0088FE", "#00C49F", "#FFBB28", "#FF8042", "#8884D8"]

_TIME_RANGE_RE = re.compile(r"^(\d+)d$")


def parse_time_range(time_range: Optional[str]) -> int:
    """``"30d"`` -> 30"""
    match = _TIME_RANGE_RE.match((time_range or DEFAULT_TIME_RANGE).strip())
    if not match:
        raise ValidationError("timeRange must look like '7d'")
    return int(match.group(1))


def _pass_rate(executions: List[ExecutionOut]) -> float:
    if not executions:
        return 0.0
    passed = sum(1 for e in executions if e.status == ExecutionStatus.PASSED)
    return round(passed * 100.0 / len(executions), 1)


class AnalyticsService:
    """Results, analytics and dashboard figures computed from stored executions"""

    def __init__(
        self,
        execution_repository: IExecutionRepository,
        test_case_repository: ITestCaseRepository,
        project_repository: IProjectRepository,
        user_repository: IUserRepository,
    ):
        self.execution_repository = execution_repository
        self.test_case_repository = test_case_repository
        self.project_repository = project_repository
        self.user_repository = user_repository

    async def _filtered(
        self,
        user_id: int,
        time_range: Optional[str],
        environment: Optional[str],
        test_type: Optional[str],
    ) -> List[ExecutionOut]:
        since = datetime.utcnow() - timedelta(days=parse_time_range(time_range))
        return await self.execution_repository.list_for_user(
            user_id,
            since=since,
            environment=environment or None,
            test_type=test_type or None,
        )

    async def results(
        self,
        user_id: int,
        time_range: Optional[str] = None,
        environment: Optional[str] = None,
        test_type: Optional[str] = None,
    ) -> List[ExecutionOut]:
        return await self._filtered(user_id, time_range, environment, test_type)

    async def analytics(
        self,
        user_id: int,
        time_range: Optional[str] = None,
        environment: Optional[str] = None,
        test_type: Optional[str] = None,
    ) -> Analytics:
        executions = await self._filtered(user_id, time_range, environment, test_type)

        total = len(executions)
        avg_duration = round(sum(e.duration for e in executions) / total, 1) if total else 0.0

        today = datetime.utcnow().date()
        days = OrderedDict(
            (today - timedelta(days=offset), [0, 0]) for offset in range(TREND_DAYS - 1, -1, -1)
        )
        for e in executions:
            if e.created_at is None:
                continue
            bucket = days.get(e.created_at.date())
            if bucket is None:
                continue
            if e.status == ExecutionStatus.PASSED:
                bucket[0] += 1
            elif e.status == ExecutionStatus.FAILED:
                bucket[1] += 1
        trends = [
            TrendPoint(date=day.strftime("%b %d"), passed=p, failed=f, total=p + f)
            for day, (p, f) in days.items()
        ]

        type_counts = Counter(e.test_type or "unknown" for e in executions)
        distribution = [
            TypeSlice(name=name.upper(), value=count, color=CHART_COLORS[i % len(CHART_COLORS)])
            for i, (name, count) in enumerate(type_counts.most_common())
        ]

        by_env: "OrderedDict[Optional[str], List[ExecutionOut]]" = OrderedDict()
        for e in executions:
            by_env.setdefault(e.environment, []).append(e)
        environment_stats = [
            EnvironmentStat(
                environment=env,
                total=len(items),
                passed=sum(1 for e in items if e.status == ExecutionStatus.PASSED),
                failed=sum(1 for e in items if e.status == ExecutionStatus.FAILED),
            )
            for env, items in by_env.items()
        ]

        return Analytics(
            total_executions=total,
            pass_rate=_pass_rate(executions),
            avg_duration=avg_duration,
            trends_data=trends,
            type_distribution=distribution,
            environment_stats=environment_stats,
        )

    async def dashboard(self, user_id: int) -> DashboardResponse:
        user = await self.user_repository.get_by_id(user_id)
        if not user:
            raise NotFoundError("User", user_id)

        tests_generated = await self.test_case_repository.count_for_user(user_id)
        executions = await self.execution_repository.list_for_user(user_id)
        recent = await self.test_case_repository.list_for_user(user_id, limit=RECENT_ACTIVITY)

        stats = DashboardStats(
            tests_generated=tests_generated,
            tests_executed=len(executions),
            projects_count=await self.project_repository.count_for_user(user_id),
            pass_rate=int(round(_pass_rate(executions))),
            monthly_quota=get_plan_limits(user.plan).tests,
            quota_used=tests_generated,
        )
        activity = [
            ActivityItem(
                id=tc.id,
                type=tc.type,
                description=f"Generated {tc.type} test: {tc.name}",
                timestamp=tc.created_at,
            )
            for tc in recent
        ]
        return DashboardResponse(stats=stats, recent_activity=activity)
