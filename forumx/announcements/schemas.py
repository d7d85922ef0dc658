"""Pydantic schemas for announcements."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forumx.core.schemas import CamelModel

from .models import Announcement


class CreateAnnouncementRequest(CamelModel):
    title: str = Field("", max_length=300)
    description: str = Field("", max_length=20000)
    author_name: str | None = Field(None, max_length=200)
    author_photo: str | None = Field(None, max_length=2000)


class UpdateAnnouncementRequest(CamelModel):
    title: str = Field("", max_length=300)
    description: str = Field("", max_length=20000)


class AnnouncementResponse(CamelModel):
    id: UUID
    author_email: str
    author_name: str | None = None
    author_photo: str | None = None
    title: str
    description: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_announcement(cls, announcement: Announcement) -> "AnnouncementResponse":
        return cls(
            id=announcement.announcement_id,
            author_email=announcement.author_email,
            author_name=announcement.author_name,
            author_photo=announcement.author_photo,
            title=announcement.title,
            description=announcement.description,
            created_at=announcement.created_at,
            updated_at=announcement.updated_at,
        )


class AnnouncementCountResponse(CamelModel):
    count: int


class AnnouncementUpdatedResponse(CamelModel):
    success: bool
    message: str
