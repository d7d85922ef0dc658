"""FastAPI dependencies for users."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import UserService


def get_user_service(request: Request) -> UserService:
    """Get UserService from app state."""
    return service_from_state(request, "user_service")


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
