"""Database models for forum posts.

Per-user votes are stored as ``MAP<TEXT, TEXT>`` keyed by voter email, so a
user can hold at most one vote on a post. ``up_vote``/``down_vote`` are
denormalized counts rewritten together with the map, and ``version`` is bumped
on every vote write for optional compare-and-set updates.
"""

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import Any
from uuid import UUID, uuid4

from forumx.votes.models import VoteType, tally


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

POSTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.posts (
    post_id UUID PRIMARY KEY,
    author_email TEXT,
    author_name TEXT,
    author_photo TEXT,
    title TEXT,
    body TEXT,
    tags LIST<TEXT>,
    votes MAP<TEXT, TEXT>,
    up_vote INT,
    down_vote INT,
    version INT,
    created_at TIMESTAMP
)
"""

POSTS_AUTHOR_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS posts_author_idx
ON {keyspace}.posts (author_email)
"""

POSTS_TABLES_CQL = [
    POSTS_TABLE_CQL,
    POSTS_AUTHOR_INDEX_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class Post:
    """Forum post with its vote ledger."""

    post_id: UUID
    author_email: str
    author_name: str | None
    author_photo: str | None
    title: str
    body: str | None
    tags: list[str]
    created_at: datetime
    votes: dict[str, VoteType] = field(default_factory=dict)
    up_vote: int = 0
    down_vote: int = 0
    version: int = 0

    @property
    def vote_difference(self) -> int:
        return self.up_vote - self.down_vote

    @classmethod
    def from_row(cls, row: Any) -> "Post":
        """Create Post from Cassandra row."""
        votes = {email: VoteType(vote) for email, vote in (row.votes or {}).items()}
        return cls(
            post_id=row.post_id,
            author_email=row.author_email,
            author_name=row.author_name,
            author_photo=row.author_photo,
            title=row.title,
            body=row.body,
            tags=list(row.tags or []),
            created_at=row.created_at,
            votes=votes,
            up_vote=row.up_vote or 0,
            down_vote=row.down_vote or 0,
            version=row.version or 0,
        )

    def with_votes(self, votes: dict[str, VoteType]) -> "Post":
        """Copy of this post carrying ``votes`` and recounted totals."""
        up, down = tally(votes.values())
        return Post(
            post_id=self.post_id,
            author_email=self.author_email,
            author_name=self.author_name,
            author_photo=self.author_photo,
            title=self.title,
            body=self.body,
            tags=list(self.tags),
            created_at=self.created_at,
            votes=votes,
            up_vote=up,
            down_vote=down,
            version=self.version + 1,
        )


def create_post(
    author_email: str,
    title: str,
    body: str | None = None,
    tags: list[str] | None = None,
    author_name: str | None = None,
    author_photo: str | None = None,
) -> Post:
    """Create a new post with zeroed vote counters."""
    return Post(
        post_id=uuid4(),
        author_email=author_email,
        author_name=author_name,
        author_photo=author_photo,
        title=title,
        body=body,
        tags=list(tags or []),
        created_at=datetime.now(UTC),
    )
