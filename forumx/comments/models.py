"""Database models for post comments.

Architecture: Adjacency List pattern for threaded replies
- parent_id references the parent comment (NULL for top-level comments)
- reply trees of any depth are rebuilt client-side from parent_id chains

Votes are two disjoint ``SET<TEXT>`` columns of voter emails; the
``upvotes``/``downvotes`` counters always equal the set sizes.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

COMMENTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.comments (
    comment_id UUID PRIMARY KEY,
    post_id UUID,
    parent_id UUID,
    text TEXT,
    user_email TEXT,
    user_name TEXT,
    user_photo TEXT,
    upvoters SET<TEXT>,
    downvoters SET<TEXT>,
    upvotes INT,
    downvotes INT,
    reported BOOLEAN,
    version INT,
    created_at TIMESTAMP
)
"""

# Index for fetching comments of a post
COMMENTS_POST_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS comments_post_idx
ON {keyspace}.comments (post_id)
"""

COMMENTS_TABLES_CQL = [
    COMMENTS_TABLE_CQL,
    COMMENTS_POST_INDEX_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class Comment:
    """Comment entity with its voter sets."""

    comment_id: UUID
    post_id: UUID
    parent_id: UUID | None
    text: str
    user_email: str
    user_name: str | None
    user_photo: str | None
    created_at: datetime
    upvoters: set[str] = field(default_factory=set)
    downvoters: set[str] = field(default_factory=set)
    reported: bool = False
    version: int = 0

    @property
    def upvotes(self) -> int:
        return len(self.upvoters)

    @property
    def downvotes(self) -> int:
        return len(self.downvoters)

    @classmethod
    def from_row(cls, row: Any) -> "Comment":
        """Create Comment from Cassandra row."""
        return cls(
            comment_id=row.comment_id,
            post_id=row.post_id,
            parent_id=row.parent_id,
            text=row.text,
            user_email=row.user_email,
            user_name=row.user_name,
            user_photo=row.user_photo,
            created_at=row.created_at,
            upvoters=set(row.upvoters or ()),
            downvoters=set(row.downvoters or ()),
            reported=row.reported or False,
            version=row.version or 0,
        )

    def with_voters(self, upvoters: set[str], downvoters: set[str]) -> "Comment":
        """Copy of this comment carrying new voter sets."""
        return Comment(
            comment_id=self.comment_id,
            post_id=self.post_id,
            parent_id=self.parent_id,
            text=self.text,
            user_email=self.user_email,
            user_name=self.user_name,
            user_photo=self.user_photo,
            created_at=self.created_at,
            upvoters=upvoters,
            downvoters=downvoters,
            reported=self.reported,
            version=self.version + 1,
        )


def create_comment(
    post_id: UUID,
    text: str,
    user_email: str,
    user_name: str | None = None,
    user_photo: str | None = None,
    parent_id: UUID | None = None,
) -> Comment:
    """Create a new comment or reply."""
    return Comment(
        comment_id=uuid4(),
        post_id=post_id,
        parent_id=parent_id,
        text=text,
        user_email=user_email,
        user_name=user_name,
        user_photo=user_photo,
        created_at=datetime.now(UTC),
    )
