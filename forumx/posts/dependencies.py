"""FastAPI dependencies for posts."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import PostService


def get_post_service(request: Request) -> PostService:
    """Get PostService from app state."""
    return service_from_state(request, "post_service")


PostServiceDep = Annotated[PostService, Depends(get_post_service)]
