"""Pydantic schemas for votes."""

from forumx.core.schemas import CamelModel


class VoteRequest(CamelModel):
    """Vote body; ``type`` is ``upvote`` or ``downvote``."""

    type: str = ""
    user_email: str = ""


class PostVoteResponse(CamelModel):
    up_vote: int
    down_vote: int


class CommentVoteResponse(CamelModel):
    upvotes: int
    downvotes: int
