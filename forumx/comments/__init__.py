"""Comment module.

Provides comments on posts with:
- Replies through ``parent_id`` chains
- Voter sets for upvotes and downvotes
- A ``reported`` flag set by the moderation pipeline

Note: Router is not exported here to avoid circular imports.
Import directly from forumx.comments.router when needed.
"""

from .models import COMMENTS_TABLES_CQL, Comment, create_comment
from .service import CommentService


__all__ = [
    "COMMENTS_TABLES_CQL",
    "Comment",
    "CommentService",
    "create_comment",
]
