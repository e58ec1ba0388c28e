from fastapi import APIRouter, Depends, status
from pydantic import BaseModel
from datetime import datetime
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session
import structlog

from autotest.config.settings import settings
from autotest.core.database import get_database
from autotest.core.dependencies import get_ai_service
from autotest.repositories.interfaces.ai_service import IAIService

logger = structlog.get_logger()

router = APIRouter(prefix="/health", tags=["health"])


class HealthResponse(BaseModel):
    status: str
    timestamp: datetime
    version: str
    environment: str


@router.get("", response_model=HealthResponse, status_code=status.HTTP_200_OK)
async def health_check():
    """Health check endpoint"""
    return HealthResponse(
        status="healthy",
        timestamp=datetime.utcnow(),
        version="1.0.0",
        environment=settings.environment
    )


@router.get("/readiness")
async def readiness_check(
    db: Session = Depends(get_database),
    ai_service: IAIService = Depends(get_ai_service)
):
    """Readiness check endpoint"""
    try:
        db.execute(text("SELECT 1"))
        database = "ok"
    except SQLAlchemyError as e:
        logger.error("Database readiness check failed", error=str(e))
        database = "error"

    checks = {
        "database": database,
        # Informational; generation falls back to templates without a model
        "ai_provider": settings.ai_provider.lower(),
        "ai_model": "ok" if ai_service.is_configured else "not_configured",
    }

    return {
        "status": "ready" if database == "ok" else "not_ready",
        "checks": checks,
        "timestamp": datetime.utcnow()
    }
