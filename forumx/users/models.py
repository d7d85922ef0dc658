"""Database models for forum users.

Users are keyed by email (unique). ``user_id`` is the public document id used
by admin routes and ``uid`` is the identity provider subject used by the
payment flow; both are reachable through secondary indexes.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid4

from forumx.auth.permissions import UserRole


class Badge(str, Enum):
    """Membership badge shown next to a user's name."""

    NONE = "none"
    BRONZE = "bronze"
    GOLD = "gold"


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

USERS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.users (
    email TEXT PRIMARY KEY,
    user_id UUID,
    uid TEXT,
    name TEXT,
    photo_url TEXT,
    role TEXT,
    membership BOOLEAN,
    badge TEXT,
    created_at TIMESTAMP,
    last_login TIMESTAMP
)
"""

USERS_ID_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS users_user_id_idx
ON {keyspace}.users (user_id)
"""

USERS_UID_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS users_uid_idx
ON {keyspace}.users (uid)
"""

USERS_BADGE_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS users_badge_idx
ON {keyspace}.users (badge)
"""

USERS_TABLES_CQL = [
    USERS_TABLE_CQL,
    USERS_ID_INDEX_CQL,
    USERS_UID_INDEX_CQL,
    USERS_BADGE_INDEX_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class User:
    """Forum user."""

    user_id: UUID
    email: str
    uid: str | None
    name: str | None
    photo_url: str | None
    role: UserRole
    membership: bool
    badge: Badge
    created_at: datetime
    last_login: datetime | None

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    @classmethod
    def from_row(cls, row: Any) -> "User":
        """Create User from Cassandra row."""
        return cls(
            user_id=row.user_id,
            email=row.email,
            uid=row.uid,
            name=row.name,
            photo_url=row.photo_url,
            role=UserRole(row.role or UserRole.USER.value),
            membership=row.membership or False,
            badge=Badge(row.badge or Badge.NONE.value),
            created_at=row.created_at,
            last_login=row.last_login,
        )


def create_user(
    email: str,
    uid: str | None = None,
    name: str | None = None,
    photo_url: str | None = None,
) -> User:
    """Create a new user with the defaults given at first login."""
    now = datetime.now(UTC)
    return User(
        user_id=uuid4(),
        email=email,
        uid=uid,
        name=name,
        photo_url=photo_url,
        role=UserRole.USER,
        membership=False,
        badge=Badge.BRONZE,
        created_at=now,
        last_login=now,
    )
