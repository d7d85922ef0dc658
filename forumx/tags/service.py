"""Tag service layer."""

from collections import Counter
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.core.errors import InvalidArgumentError, NotFoundError

from .models import Tag, create_tag


if TYPE_CHECKING:
    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)

SEARCH_LIMIT = 10


class TagService:
    """Service for tag management."""

    def __init__(self, store: "ContentStore"):
        self.store = store

    async def add_many(self, names: list[str]) -> list[Tag]:
        """Insert every name not already present. Returns the new tags."""
        created: list[Tag] = []
        seen: set[str] = set()
        for name in names:
            if not name or name in seen:
                continue
            seen.add(name)
            if await self.store.get_tag_by_name(name) is not None:
                continue
            tag = create_tag(name)
            await self.store.insert_tag(tag)
            created.append(tag)

        logger.info("tags_added", requested=len(names), created=len(created))
        return created

    async def list_all(self) -> list[Tag]:
        return await self.store.list_tags()

    async def search(self, query: str | None) -> list[Tag]:
        """Up to ten tags whose name contains ``query`` (case-insensitive)."""
        if not query or not query.strip():
            return []
        needle = query.strip().lower()
        tags = await self.store.list_tags()
        return [t for t in tags if needle in t.name.lower()][:SEARCH_LIMIT]

    async def usage_counts(self) -> list[tuple[str, int]]:
        """(tag, number of posts using it), most used first."""
        counter: Counter[str] = Counter()
        for post in await self.store.list_posts():
            counter.update(post.tags)
        return counter.most_common()

    async def delete(self, tag_id: UUID) -> None:
        if await self.store.get_tag(tag_id) is None:
            raise NotFoundError("Tag not found")
        await self.store.delete_tag(tag_id)
        logger.info("tag_deleted", tag_id=str(tag_id))


def validate_tag_names(names: list[str] | None) -> list[str]:
    """Reject a missing tag list."""
    if names is None:
        raise InvalidArgumentError("Tags array is required")
    return [name.strip() for name in names if name and name.strip()]
