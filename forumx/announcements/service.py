"""Announcement service layer."""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.core.errors import InvalidArgumentError, NotFoundError

from .models import Announcement, create_announcement


if TYPE_CHECKING:
    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)


def _require_text(title: str | None, description: str | None) -> None:
    if not title or not title.strip() or not description or not description.strip():
        raise InvalidArgumentError("Title and description are required")


class AnnouncementService:
    """Service for announcement management."""

    def __init__(self, store: "ContentStore"):
        self.store = store

    async def create(
        self,
        author_email: str,
        title: str,
        description: str,
        author_name: str | None = None,
        author_photo: str | None = None,
    ) -> Announcement:
        _require_text(title, description)
        announcement = create_announcement(
            author_email=author_email,
            title=title,
            description=description,
            author_name=author_name,
            author_photo=author_photo,
        )
        await self.store.insert_announcement(announcement)
        logger.info(
            "announcement_created",
            announcement_id=str(announcement.announcement_id),
            author=author_email,
        )
        return announcement

    async def list_all(self) -> list[Announcement]:
        """All announcements, newest first."""
        announcements = await self.store.list_announcements()
        return sorted(announcements, key=lambda a: a.created_at, reverse=True)

    async def count(self) -> int:
        return await self.store.count_announcements()

    async def update(
        self, announcement_id: UUID, title: str, description: str
    ) -> Announcement:
        _require_text(title, description)
        announcement = await self.store.get_announcement(announcement_id)
        if announcement is None:
            raise NotFoundError("Announcement not found")

        announcement.title = title
        announcement.description = description
        announcement.updated_at = datetime.now(UTC)
        await self.store.update_announcement(
            announcement_id, title, description, announcement.updated_at
        )
        logger.info("announcement_updated", announcement_id=str(announcement_id))
        return announcement

    async def delete(self, announcement_id: UUID) -> None:
        if await self.store.get_announcement(announcement_id) is None:
            raise NotFoundError("Announcement not found")
        await self.store.delete_announcement(announcement_id)
        logger.info("announcement_deleted", announcement_id=str(announcement_id))
