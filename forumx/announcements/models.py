"""Database models for admin announcements."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


ANNOUNCEMENTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.announcements (
    announcement_id UUID PRIMARY KEY,
    author_email TEXT,
    author_name TEXT,
    author_photo TEXT,
    title TEXT,
    description TEXT,
    created_at TIMESTAMP,
    updated_at TIMESTAMP
)
"""

ANNOUNCEMENTS_TABLES_CQL = [ANNOUNCEMENTS_TABLE_CQL]


@dataclass
class Announcement:
    """Site-wide announcement written by an admin."""

    announcement_id: UUID
    author_email: str
    author_name: str | None
    author_photo: str | None
    title: str
    description: str
    created_at: datetime
    updated_at: datetime | None = None

    @classmethod
    def from_row(cls, row: Any) -> "Announcement":
        """Create Announcement from Cassandra row."""
        return cls(
            announcement_id=row.announcement_id,
            author_email=row.author_email,
            author_name=row.author_name,
            author_photo=row.author_photo,
            title=row.title,
            description=row.description,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


def create_announcement(
    author_email: str,
    title: str,
    description: str,
    author_name: str | None = None,
    author_photo: str | None = None,
) -> Announcement:
    return Announcement(
        announcement_id=uuid4(),
        author_email=author_email,
        author_name=author_name,
        author_photo=author_photo,
        title=title,
        description=description,
        created_at=datetime.now(UTC),
    )
