"""FastAPI dependencies for statistics."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import StatsService


def get_stats_service(request: Request) -> StatsService:
    """Get StatsService from app state."""
    return service_from_state(request, "stats_service")


StatsServiceDep = Annotated[StatsService, Depends(get_stats_service)]
