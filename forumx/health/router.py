"""Health check endpoints."""

from fastapi import APIRouter, Request, Response, status

from forumx.config import get_settings
from forumx.core.database import AsyncCassandraConnection
from forumx.core.redis import get_redis


router = APIRouter(prefix="/health", tags=["health"])


@router.get("/live")
async def liveness() -> dict[str, str]:
    """Liveness probe - checks if the application is running."""
    return {"status": "alive"}


@router.get("/ready")
async def readiness(request: Request, response: Response) -> dict[str, str | bool]:
    """Readiness probe - ready once the content store is wired in."""
    settings = get_settings()
    store_ready = getattr(request.app.state, "store", None) is not None
    if not store_ready:
        response.status_code = status.HTTP_503_SERVICE_UNAVAILABLE
    return {
        "status": "ready" if store_ready else "not_ready",
        "environment": settings.environment,
        "debug": settings.debug,
        "cassandra": AsyncCassandraConnection.is_connected(),
        "redis": get_redis() is not None,
    }


@router.get("")
async def health() -> dict[str, str]:
    """General health check endpoint."""
    settings = get_settings()
    return {
        "status": "healthy",
        "app_name": settings.app_name,
        "version": settings.app_version,
        "environment": settings.environment,
    }
