"""Announcement API routes. Reads are public, writes are admin-only."""

from uuid import UUID

from fastapi import APIRouter, status

from forumx.auth.dependencies import AdminUser
from forumx.core.schemas import MessageResponse

from .dependencies import AnnouncementServiceDep
from .schemas import (
    AnnouncementCountResponse,
    AnnouncementResponse,
    AnnouncementUpdatedResponse,
    CreateAnnouncementRequest,
    UpdateAnnouncementRequest,
)


router = APIRouter(prefix="/announcements", tags=["announcements"])


@router.post(
    "",
    response_model=AnnouncementResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Publish an announcement",
)
async def create_announcement(
    body: CreateAnnouncementRequest,
    admin: AdminUser,
    service: AnnouncementServiceDep,
) -> AnnouncementResponse:
    announcement = await service.create(
        author_email=admin.email,
        title=body.title,
        description=body.description,
        author_name=body.author_name or admin.name,
        author_photo=body.author_photo or admin.photo_url,
    )
    return AnnouncementResponse.from_announcement(announcement)


@router.get("", response_model=list[AnnouncementResponse], summary="List announcements")
async def list_announcements(service: AnnouncementServiceDep) -> list[AnnouncementResponse]:
    return [AnnouncementResponse.from_announcement(a) for a in await service.list_all()]


@router.get("/count", response_model=AnnouncementCountResponse, summary="Count announcements")
async def count_announcements(service: AnnouncementServiceDep) -> AnnouncementCountResponse:
    return AnnouncementCountResponse(count=await service.count())


@router.patch(
    "/{announcement_id}",
    response_model=AnnouncementUpdatedResponse,
    summary="Edit an announcement",
)
async def update_announcement(
    announcement_id: UUID,
    body: UpdateAnnouncementRequest,
    _admin: AdminUser,
    service: AnnouncementServiceDep,
) -> AnnouncementUpdatedResponse:
    await service.update(announcement_id, body.title, body.description)
    return AnnouncementUpdatedResponse(
        success=True, message="Announcement updated successfully"
    )


@router.delete(
    "/{announcement_id}",
    response_model=MessageResponse,
    summary="Delete an announcement",
)
async def delete_announcement(
    announcement_id: UUID,
    _admin: AdminUser,
    service: AnnouncementServiceDep,
) -> MessageResponse:
    await service.delete(announcement_id)
    return MessageResponse(message="Announcement deleted successfully")
