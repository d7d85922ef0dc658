"""Post service layer.

Business logic for:
- Post creation with the free-tier post limit
- Listing, pagination, tag search and popularity ranking
- Post details with comments
- Deletion by author or admin
"""

import asyncio
from dataclasses import dataclass
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.comments.models import Comment
from forumx.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError

from .models import Post, create_post


if TYPE_CHECKING:
    from forumx.store import ContentStore
    from forumx.users.models import User


logger = structlog.get_logger(__name__)


@dataclass
class PostWithStats:
    """A post annotated with its comment count."""

    post: Post
    comment_count: int

    @property
    def vote_difference(self) -> int:
        return self.post.vote_difference


def newest_first(posts: list[Post]) -> list[Post]:
    return sorted(posts, key=lambda p: p.created_at, reverse=True)


class PostService:
    """Service for post management."""

    def __init__(
        self,
        store: "ContentStore",
        free_post_limit: int = 5,
        page_size: int = 5,
    ):
        self.store = store
        self.free_post_limit = free_post_limit
        self.page_size = page_size

    async def create(
        self,
        author_email: str,
        title: str,
        body: str | None = None,
        tags: list[str] | None = None,
        author_name: str | None = None,
        author_photo: str | None = None,
    ) -> Post:
        """Create a post for a registered author.

        Raises:
            InvalidArgumentError: Title missing.
            NotFoundError: Author is not a registered user.
            ForbiddenError: Non-member reached the free post limit.
        """
        if not title or not title.strip():
            raise InvalidArgumentError("title is required")

        author = await self.store.get_user_by_email(author_email)
        if author is None:
            raise NotFoundError("User not found")

        if not author.membership:
            count = await self.store.count_posts_by_author(author_email)
            if count >= self.free_post_limit:
                logger.info("post_limit_reached", email=author_email, count=count)
                raise ForbiddenError("Post limit reached. Become a member to post more.")

        post = create_post(
            author_email=author_email,
            title=title,
            body=body,
            tags=tags,
            author_name=author_name or author.name,
            author_photo=author_photo or author.photo_url,
        )
        await self.store.insert_post(post)
        logger.info("post_created", post_id=str(post.post_id), author=author_email)
        return post

    async def get(self, post_id: UUID) -> Post:
        post = await self.store.get_post(post_id)
        if post is None:
            raise NotFoundError("Post not found")
        return post

    async def list_all(self) -> list[Post]:
        """All posts, newest first."""
        return newest_first(await self.store.list_posts())

    async def details(self, post_id: UUID) -> tuple[Post, list[Comment]]:
        """A post with its comments, oldest comment first."""
        post = await self.get(post_id)
        comments = await self.store.list_comments(post_id)
        return post, sorted(comments, key=lambda c: c.created_at)

    async def _with_comment_counts(self, posts: list[Post]) -> list[PostWithStats]:
        counts = await asyncio.gather(
            *(self.store.count_comments(post.post_id) for post in posts)
        )
        return [
            PostWithStats(post=post, comment_count=count)
            for post, count in zip(posts, counts, strict=True)
        ]

    async def by_author(self, author_email: str) -> list[PostWithStats]:
        """An author's posts with comment counts, newest first."""
        posts = newest_first(await self.store.list_posts_by_author(author_email))
        return await self._with_comment_counts(posts)

    async def by_tag(self, tag: str) -> list[Post]:
        """Posts having a tag that contains ``tag`` (case-insensitive)."""
        if not tag:
            raise InvalidArgumentError("Tag name is required")
        needle = tag.lower()
        posts = await self.store.list_posts()
        return newest_first(
            [p for p in posts if any(needle in t.lower() for t in p.tags)]
        )

    async def popular(self) -> list[PostWithStats]:
        """All posts ranked by vote difference, then recency."""
        ranked = await self._with_comment_counts(await self.store.list_posts())
        return sorted(
            ranked,
            key=lambda p: (p.vote_difference, p.post.created_at),
            reverse=True,
        )

    async def page(self, page: int, limit: int | None = None) -> tuple[list[Post], int]:
        """One page of posts, newest first, plus the total post count."""
        limit = limit or self.page_size
        page = max(page, 1)
        posts = await self.list_all()
        start = (page - 1) * limit
        return posts[start : start + limit], len(posts)

    async def delete(self, post_id: UUID, caller: "User | None", caller_email: str) -> None:
        """Delete a post. Only its author or an admin may do this."""
        post = await self.get(post_id)
        is_admin = caller is not None and caller.is_admin
        if post.author_email != caller_email and not is_admin:
            raise ForbiddenError("You can only delete your own post")

        await self.store.delete_post(post_id)
        logger.info("post_deleted", post_id=str(post_id), by=caller_email)
