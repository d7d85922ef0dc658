"""Notifications module for user notifications.

Provides:
- Notification creation (idempotent on id)
- Listing a user's notifications
- Mark as read, mark all as read, clear all
- Redis Pub/Sub publishing of new notifications

Note: Router is imported directly in main.py to avoid circular imports.
"""

from forumx.notifications.models import (
    NOTIFICATIONS_TABLES_CQL,
    Notification,
    create_notification,
)
from forumx.notifications.schemas import NotificationResponse
from forumx.notifications.service import NotificationService


__all__ = [
    "NOTIFICATIONS_TABLES_CQL",
    "Notification",
    "NotificationResponse",
    "NotificationService",
    "create_notification",
]
