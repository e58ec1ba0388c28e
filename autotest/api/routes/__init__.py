from fastapi import APIRouter
from autotest.api.routes import (
    ai, auth, billing, executions, health, projects, reports, results, settings, team, test_cases, uploads,
)

api_router = APIRouter()

# Include all route modules
api_router.include_router(health.router)
api_router.include_router(auth.router)
api_router.include_router(projects.router)
api_router.include_router(test_cases.router)
api_router.include_router(uploads.router)
api_router.include_router(executions.router)
api_router.include_router(results.router)
api_router.include_router(reports.router)
api_router.include_router(billing.router)
api_router.include_router(settings.router)
api_router.include_router(team.router)
api_router.include_router(ai.router)
