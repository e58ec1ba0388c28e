from dataclasses import dataclass
from typing import Dict


@dataclass(frozen=True)
class PlanLimits:
    tests: int
    members: int
    storage_gb: int
    price: float


PLANS: Dict[str, PlanLimits] = {
    "free": PlanLimits(tests=100, members=1, storage_gb=1, price=0),
    "basic": PlanLimits(tests=1000, members=5, storage_gb=10, price=29),
    "pro": PlanLimits(tests=5000, members=15, storage_gb=100, price=99),
    "enterprise": PlanLimits(tests=999999, members=999999, storage_gb=999999, price=299),
}

DEFAULT_PLAN = "free"


def get_plan_limits(plan: str) -> PlanLimits:
    """Unknown plan names fall back to the free tier."""
    return PLANS.get((plan or DEFAULT_PLAN).lower(), PLANS[DEFAULT_PLAN])
