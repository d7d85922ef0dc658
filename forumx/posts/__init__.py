"""Posts module.

Provides:
- Post creation with a free-tier limit for non-members
- Listing, pagination, tag search and popularity ranking
- Per-author listings with comment counts
"""

from .models import POSTS_TABLES_CQL, Post, create_post
from .service import PostService, PostWithStats


__all__ = [
    "POSTS_TABLES_CQL",
    "Post",
    "PostService",
    "PostWithStats",
    "create_post",
]
