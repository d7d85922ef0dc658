"""Pydantic schemas for statistics."""

from forumx.core.schemas import CamelModel


class AdminStatsResponse(CamelModel):
    total_users: int
    total_posts: int
    total_comments: int


class CountsResponse(CamelModel):
    total_users: int
    bronze_users: int
    golden_users: int
    total_posts: int
