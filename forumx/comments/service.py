"""Comment service layer.

Business logic for:
- Listing a post's comments (oldest first)
- Creating comments and replies (parent_id)
- Editing and deleting own comments; admins may delete any
"""

from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.core.errors import ForbiddenError, InvalidArgumentError, NotFoundError

from .models import Comment, create_comment


if TYPE_CHECKING:
    from forumx.store import ContentStore
    from forumx.users.models import User


logger = structlog.get_logger(__name__)


class CommentService:
    """Service for comment management."""

    def __init__(self, store: "ContentStore"):
        self.store = store

    async def list_for_post(self, post_id: UUID) -> list[Comment]:
        comments = await self.store.list_comments(post_id)
        return sorted(comments, key=lambda c: c.created_at)

    async def get(self, comment_id: UUID) -> Comment:
        comment = await self.store.get_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")
        return comment

    async def create(
        self,
        post_id: UUID,
        text: str,
        user_email: str,
        user_name: str | None = None,
        user_photo: str | None = None,
        parent_id: UUID | None = None,
    ) -> Comment:
        """Add a comment to a post, or a reply when ``parent_id`` is set.

        Raises:
            InvalidArgumentError: Empty text, or the parent is on another post.
            NotFoundError: Post or parent comment does not exist.
        """
        if not text or not text.strip():
            raise InvalidArgumentError("Missing fields")

        if await self.store.get_post(post_id) is None:
            raise NotFoundError("Post not found")

        if parent_id is not None:
            parent = await self.store.get_comment(parent_id)
            if parent is None:
                raise NotFoundError("Parent comment not found")
            if parent.post_id != post_id:
                raise InvalidArgumentError("Parent comment belongs to another post")

        comment = create_comment(
            post_id=post_id,
            text=text,
            user_email=user_email,
            user_name=user_name,
            user_photo=user_photo,
            parent_id=parent_id,
        )
        await self.store.insert_comment(comment)
        logger.info(
            "comment_created",
            comment_id=str(comment.comment_id),
            post_id=str(post_id),
            is_reply=parent_id is not None,
        )
        return comment

    async def update_text(self, comment_id: UUID, user_email: str, text: str) -> Comment:
        """Edit a comment's text. Only its author may do this."""
        if not text or not text.strip():
            raise InvalidArgumentError("Text is required")

        comment = await self.get(comment_id)
        if comment.user_email != user_email:
            raise ForbiddenError("You can only edit your own comment")

        comment.text = text
        await self.store.update_comment_text(comment_id, text)
        logger.info("comment_updated", comment_id=str(comment_id))
        return comment

    async def delete(
        self, comment_id: UUID, user_email: str, caller: "User | None" = None
    ) -> None:
        """Delete a comment. Its author or an admin may do this."""
        comment = await self.get(comment_id)
        is_admin = caller is not None and caller.is_admin
        if comment.user_email != user_email and not is_admin:
            raise ForbiddenError("You can only delete your own comment")

        await self.store.delete_comment(comment_id)
        logger.info("comment_deleted", comment_id=str(comment_id), by=user_email)
