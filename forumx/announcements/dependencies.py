"""FastAPI dependencies for announcements."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import AnnouncementService


def get_announcement_service(request: Request) -> AnnouncementService:
    """Get AnnouncementService from app state."""
    return service_from_state(request, "announcement_service")


AnnouncementServiceDep = Annotated[AnnouncementService, Depends(get_announcement_service)]
