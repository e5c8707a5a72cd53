"""Liveness and readiness probes."""

from fastapi import APIRouter, Response, status
from pydantic import BaseModel

from talentnest.config import settings
from talentnest.core.redis_client import check_redis_connection
from talentnest.database import check_database_connection

router = APIRouter()


class HealthResponse(BaseModel):
    status: str
    version: str
    environment: str


class DetailedHealthResponse(HealthResponse):
    """Readiness payload with the state of each backing service."""

    database: str
    redis: str
    document_store: str


@router.get("/health", response_model=HealthResponse, summary="Liveness probe")
async def health_check() -> HealthResponse:
    """Report that the API process is up."""
    return HealthResponse(
        status="healthy",
        version=settings.app_version,
        environment=settings.environment,
    )


@router.get(
    "/health/detailed",
    response_model=DetailedHealthResponse,
    responses={status.HTTP_503_SERVICE_UNAVAILABLE: {"model": DetailedHealthResponse}},
    summary="Readiness probe",
)
async def detailed_health_check(response: Response) -> DetailedHealthResponse:
    """
    Report database, Redis and document bucket status.

    Profiles, listings and verification all live in the database, so losing
    it answers 503 ``unhealthy``. Redis only backs caching, token revocation
    and upload throttling; losing it answers 200 ``degraded``.
    """
    db_healthy = await check_database_connection()
    redis_healthy = await check_redis_connection()

    if not db_healthy:
        overall = "unhealthy"
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    elif not redis_healthy:
        overall = "degraded"
    else:
        overall = "healthy"

    return DetailedHealthResponse(
        status=overall,
        version=settings.app_version,
        environment=settings.environment,
        database="healthy" if db_healthy else "unhealthy",
        redis="healthy" if redis_healthy else "unhealthy",
        document_store="configured" if settings.firebase_storage_bucket else "not_configured",
    )


@router.get("/ping", summary="Simple ping")
async def ping() -> dict[str, str]:
    return {"message": "pong"}
