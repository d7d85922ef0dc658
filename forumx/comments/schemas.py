"""Pydantic schemas for comments."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forumx.core.schemas import CamelModel

from .models import Comment


class CreateCommentRequest(CamelModel):
    """Create a comment, or a reply when ``parentId`` is set."""

    post_id: UUID
    text: str = Field(max_length=10000)
    parent_id: UUID | None = None
    user_email: str | None = Field(None, description="Must match the caller if sent")
    user_name: str | None = Field(None, max_length=200)
    user_photo: str | None = Field(None, max_length=2000)


class UpdateCommentRequest(CamelModel):
    text: str = Field(max_length=10000)


class CommentCreatedResponse(CamelModel):
    message: str
    comment_id: UUID


class CommentResponse(CamelModel):
    """Comment document with voter lists and counts."""

    id: UUID
    post_id: UUID
    parent_id: UUID | None = None
    text: str
    user_email: str
    user_name: str | None = None
    user_photo: str | None = None
    upvoters: list[str]
    downvoters: list[str]
    upvotes: int
    downvotes: int
    reported: bool
    created_at: datetime

    @classmethod
    def from_comment(cls, comment: Comment) -> "CommentResponse":
        return cls(
            id=comment.comment_id,
            post_id=comment.post_id,
            parent_id=comment.parent_id,
            text=comment.text,
            user_email=comment.user_email,
            user_name=comment.user_name,
            user_photo=comment.user_photo,
            upvoters=sorted(comment.upvoters),
            downvoters=sorted(comment.downvoters),
            upvotes=comment.upvotes,
            downvotes=comment.downvotes,
            reported=comment.reported,
            created_at=comment.created_at,
        )
