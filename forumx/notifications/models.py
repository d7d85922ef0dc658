"""Database models for notifications.

Notifications are written by the moderation pipeline (a comment author is
told when their comment gets reported) and read, marked read or cleared by
their recipient.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

NOTIFICATION_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.notifications (
    notification_id UUID PRIMARY KEY,
    user_email TEXT,
    message TEXT,
    date TIMESTAMP,
    read BOOLEAN
)
"""

# Index for fetching a user's notifications
NOTIFICATION_USER_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS notifications_user_idx
ON {keyspace}.notifications (user_email)
"""

NOTIFICATIONS_TABLES_CQL = [
    NOTIFICATION_TABLE_CQL,
    NOTIFICATION_USER_INDEX_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class Notification:
    """Notification addressed to one user."""

    notification_id: UUID
    user_email: str
    message: str
    date: datetime
    read: bool = False

    @classmethod
    def from_row(cls, row: Any) -> "Notification":
        """Create Notification from Cassandra row."""
        return cls(
            notification_id=row.notification_id,
            user_email=row.user_email,
            message=row.message,
            date=row.date,
            read=row.read or False,
        )

    def to_dict(self) -> dict[str, Any]:
        """Convert to the camelCase payload published to subscribers."""
        return {
            "id": str(self.notification_id),
            "userEmail": self.user_email,
            "message": self.message,
            "date": self.date.isoformat(),
            "read": self.read,
        }


def create_notification(
    user_email: str,
    message: str,
    notification_id: UUID | None = None,
) -> Notification:
    """Create a new unread notification."""
    return Notification(
        notification_id=notification_id or uuid4(),
        user_email=user_email,
        message=message,
        date=datetime.now(UTC),
    )


def report_message(reason: str) -> str:
    """Message sent to a comment author when their comment is reported."""
    return f'Your comment has been reported for: "{reason}"'
