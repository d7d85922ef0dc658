"""Pydantic schemas for notifications."""

from datetime import datetime
from uuid import UUID

from forumx.core.schemas import CamelModel

from .models import Notification


class NotificationResponse(CamelModel):
    """Single notification."""

    id: UUID
    user_email: str
    message: str
    date: datetime
    read: bool

    @classmethod
    def from_notification(cls, notification: Notification) -> "NotificationResponse":
        return cls(
            id=notification.notification_id,
            user_email=notification.user_email,
            message=notification.message,
            date=notification.date,
            read=notification.read,
        )
