"""Helpers for reading lifespan-built services from ``app.state``."""

from typing import Any

from fastapi import HTTPException, Request, status


def service_from_state(request: Request, name: str) -> Any:
    """Get a service stored on ``app.state`` during startup.

    Raises:
        HTTPException(503): If the service was not initialized (for example
            when the database was unreachable at startup).
    """
    service = getattr(request.app.state, name, None)
    if service is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Service not available: {name}",
        )
    return service
