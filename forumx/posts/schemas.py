"""Pydantic schemas for posts."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forumx.comments.schemas import CommentResponse
from forumx.core.schemas import CamelModel
from forumx.votes.models import VoteType

from .models import Post
from .service import PostWithStats


class CreatePostRequest(CamelModel):
    title: str = Field(max_length=300)
    body: str | None = Field(None, max_length=50000)
    tags: list[str] = Field(default_factory=list, max_length=20)
    author_email: str | None = Field(None, description="Must match the caller if sent")
    author_name: str | None = Field(None, max_length=200)
    author_photo: str | None = Field(None, max_length=2000)


class PostCreatedResponse(CamelModel):
    message: str
    post_id: UUID


class VoteEntry(CamelModel):
    user_email: str
    vote_type: VoteType


class PostResponse(CamelModel):
    """Post document with its vote entries."""

    id: UUID
    author_email: str
    author_name: str | None = None
    author_photo: str | None = None
    title: str
    body: str | None = None
    tags: list[str]
    up_vote: int
    down_vote: int
    votes: list[VoteEntry]
    created_at: datetime

    @classmethod
    def post_fields(cls, post: Post) -> dict:
        return {
            "id": post.post_id,
            "author_email": post.author_email,
            "author_name": post.author_name,
            "author_photo": post.author_photo,
            "title": post.title,
            "body": post.body,
            "tags": post.tags,
            "up_vote": post.up_vote,
            "down_vote": post.down_vote,
            "votes": [
                VoteEntry(user_email=email, vote_type=vote)
                for email, vote in sorted(post.votes.items())
            ],
            "created_at": post.created_at,
        }

    @classmethod
    def from_post(cls, post: Post) -> "PostResponse":
        return cls(**cls.post_fields(post))


class PostStatsResponse(PostResponse):
    """Post with comment count and vote difference."""

    comment_count: int
    vote_difference: int

    @classmethod
    def from_stats(cls, stats: PostWithStats) -> "PostStatsResponse":
        return cls(
            **cls.post_fields(stats.post),
            comment_count=stats.comment_count,
            vote_difference=stats.vote_difference,
        )


class PostDetailsResponse(PostResponse):
    comments: list[CommentResponse]


class PostPageResponse(CamelModel):
    posts: list[PostResponse]
    total: int
