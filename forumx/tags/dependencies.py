"""FastAPI dependencies for tags."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import TagService


def get_tag_service(request: Request) -> TagService:
    """Get TagService from app state."""
    return service_from_state(request, "tag_service")


TagServiceDep = Annotated[TagService, Depends(get_tag_service)]
