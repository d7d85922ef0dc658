"""Dashboard and badge statistics."""

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING

from forumx.users.models import Badge


if TYPE_CHECKING:
    from forumx.store import ContentStore


@dataclass
class AdminStats:
    total_users: int
    total_posts: int
    total_comments: int


@dataclass
class PublicCounts:
    total_users: int
    bronze_users: int
    golden_users: int
    total_posts: int


class StatsService:
    """Aggregate counts over the content store."""

    def __init__(self, store: "ContentStore"):
        self.store = store

    async def admin_stats(self) -> AdminStats:
        users, posts, comments = await asyncio.gather(
            self.store.count_users(),
            self.store.count_posts(),
            self.store.count_comments(),
        )
        return AdminStats(total_users=users, total_posts=posts, total_comments=comments)

    async def public_counts(self) -> PublicCounts:
        users, bronze, gold, posts = await asyncio.gather(
            self.store.count_users(),
            self.store.count_users(Badge.BRONZE),
            self.store.count_users(Badge.GOLD),
            self.store.count_posts(),
        )
        return PublicCounts(
            total_users=users,
            bronze_users=bronze,
            golden_users=gold,
            total_posts=posts,
        )
