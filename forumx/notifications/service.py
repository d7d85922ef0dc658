"""Notification service layer.

Business logic for:
- Creating notifications (idempotent on notification id)
- Listing a user's notifications, newest first
- Marking one or all notifications as read
- Clearing a user's notifications
- Publishing new notifications to Redis for real-time delivery
"""

import contextlib
import json
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.core.errors import NotFoundError
from forumx.core.redis import notification_channel

from .models import Notification


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)


class NotificationService:
    """Service for notification management."""

    def __init__(self, store: "ContentStore", redis: "Redis | None" = None):
        """Initialize with the content store and optional Redis."""
        self.store = store
        self.redis = redis

    async def create(self, notification: Notification) -> bool:
        """Insert a notification if its id is new.

        Returns:
            True if inserted, False if a notification with this id existed.
        """
        inserted = await self.store.insert_notification(notification)
        if inserted:
            await self._publish_notification(notification)
            logger.info(
                "notification_created",
                notification_id=str(notification.notification_id),
                recipient=notification.user_email,
            )
        return inserted

    async def _publish_notification(self, notification: Notification) -> None:
        """Publish notification to Redis Pub/Sub for real-time delivery."""
        if not self.redis:
            return

        channel = notification_channel(notification.user_email)
        message = {"type": "notification", "data": notification.to_dict()}

        # Non-critical: don't fail notification creation if Redis publish fails
        with contextlib.suppress(Exception):
            await self.redis.publish(channel, json.dumps(message))

    async def list_for_user(self, user_email: str) -> list[Notification]:
        """Get a user's notifications, newest first."""
        notifications = await self.store.list_notifications(user_email)
        return sorted(notifications, key=lambda n: n.date, reverse=True)

    async def get(self, notification_id: UUID) -> Notification:
        """Get a notification by id.

        Raises:
            NotFoundError: If it does not exist.
        """
        notification = await self.store.get_notification(notification_id)
        if notification is None:
            raise NotFoundError("Notification not found")
        return notification

    async def mark_read(self, notification: Notification) -> None:
        """Mark a notification as read. Already-read is a no-op."""
        if notification.read:
            return
        await self.store.mark_notification_read(notification.notification_id)

    async def mark_all_read(self, user_email: str) -> int:
        """Mark all of a user's notifications read. Returns how many changed."""
        count = await self.store.mark_all_notifications_read(user_email)
        logger.info("notifications_marked_read", recipient=user_email, count=count)
        return count

    async def clear_all(self, user_email: str) -> int:
        """Delete all of a user's notifications. Returns how many were removed."""
        count = await self.store.clear_notifications(user_email)
        logger.info("notifications_cleared", recipient=user_email, count=count)
        return count
