"""Health check endpoints."""

from fastapi import APIRouter, status
from pydantic import BaseModel

from app.availability.timezone import CIVIL_TZ
from app.config import settings
from app.core.redis_client import check_redis_connection
from app.database import check_database_connection
from app.dependencies import ClockDep

router = APIRouter()


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    version: str
    environment: str
    civil_time: str
    civil_timezone: str


class DetailedHealthResponse(BaseModel):
    """Detailed health check response model."""

    status: str
    version: str
    environment: str
    database: str
    redis: str


@router.get(
    "/health",
    response_model=HealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Basic health check",
)
async def health_check(clock: ClockDep) -> HealthResponse:
    """
    Basic health check endpoint.

    Reports the civil time the availability engine is using, which makes a
    misconfigured offset visible without computing slots.
    """
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
        civil_time=clock.now().isoformat(timespec="seconds"),
        civil_timezone=str(CIVIL_TZ),
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Detailed health check",
)
async def detailed_health_check() -> DetailedHealthResponse:
    """
    Detailed health check with database and Redis status.

    Returns:
        Detailed health status including dependencies
    """
    db_healthy = await check_database_connection()
    redis_healthy = await check_redis_connection()

    return DetailedHealthResponse(
        status="healthy" if db_healthy and redis_healthy else "degraded",
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
        redis="healthy" if redis_healthy else "unhealthy",
    )


@router.get(
    "/ping",
    status_code=status.HTTP_200_OK,
    tags=["Health"],
    summary="Liveness probe",
)
async def ping() -> dict[str, str]:
    """Liveness probe that touches no dependency."""
    return {"message": "pong"}
