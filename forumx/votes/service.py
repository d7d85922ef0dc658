"""Vote ledger: toggle-vote reconciliation for posts and comments.

Every vote is a read-modify-write of a single document. By default the write
is unconditional (last write wins). With ``conditional_updates`` enabled the
write is a compare-and-set on the document's ``version`` and is retried from a
fresh read until it applies or ``max_attempts`` is exhausted.
"""

from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.core.errors import InvalidArgumentError, NotFoundError, StoreError

from .models import (
    VoteCounts,
    VoteType,
    apply_to_ledger,
    apply_to_voter_sets,
    parse_vote_type,
)


if TYPE_CHECKING:
    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)


def _validate(user_email: str | None, vote_type: str | VoteType | None) -> VoteType:
    try:
        parsed = parse_vote_type(vote_type)
    except ValueError as e:
        raise InvalidArgumentError("Invalid vote type") from e
    if not user_email:
        raise InvalidArgumentError("User email is required")
    return parsed


class VoteLedger:
    """Applies toggle votes and returns the resulting aggregate counts."""

    def __init__(
        self,
        store: "ContentStore",
        conditional_updates: bool = False,
        max_attempts: int = 5,
    ):
        self.store = store
        self.conditional_updates = conditional_updates
        self.max_attempts = max(1, max_attempts) if conditional_updates else 1

    async def vote_post(
        self, post_id: UUID, user_email: str, vote_type: str | VoteType
    ) -> VoteCounts:
        """Apply a vote to a post.

        Raises:
            InvalidArgumentError: Unknown vote type or empty email.
            NotFoundError: Post does not exist (nothing is written).
            StoreError: Compare-and-set attempts exhausted.
        """
        requested = _validate(user_email, vote_type)

        for attempt in range(1, self.max_attempts + 1):
            post = await self.store.get_post(post_id)
            if post is None:
                raise NotFoundError("Post not found")

            updated = post.with_votes(apply_to_ledger(post.votes, user_email, requested))
            expected = post.version if self.conditional_updates else None
            if await self.store.save_post_votes(updated, expected_version=expected):
                logger.info(
                    "vote_applied",
                    target="post",
                    target_id=str(post_id),
                    vote_type=requested.value,
                    up=updated.up_vote,
                    down=updated.down_vote,
                    attempt=attempt,
                )
                return VoteCounts(up=updated.up_vote, down=updated.down_vote)

            logger.info(
                "vote_conflict", target="post", target_id=str(post_id), attempt=attempt
            )

        raise StoreError(
            f"Vote on post {post_id} could not be applied after "
            f"{self.max_attempts} attempts"
        )

    async def vote_comment(
        self, comment_id: UUID, user_email: str, vote_type: str | VoteType
    ) -> VoteCounts:
        """Apply a vote to a comment (same rules as ``vote_post``)."""
        requested = _validate(user_email, vote_type)

        for attempt in range(1, self.max_attempts + 1):
            comment = await self.store.get_comment(comment_id)
            if comment is None:
                raise NotFoundError("Comment not found")

            upvoters, downvoters = apply_to_voter_sets(
                comment.upvoters, comment.downvoters, user_email, requested
            )
            updated = comment.with_voters(upvoters, downvoters)
            expected = comment.version if self.conditional_updates else None
            if await self.store.save_comment_votes(updated, expected_version=expected):
                logger.info(
                    "vote_applied",
                    target="comment",
                    target_id=str(comment_id),
                    vote_type=requested.value,
                    up=updated.upvotes,
                    down=updated.downvotes,
                    attempt=attempt,
                )
                return VoteCounts(up=updated.upvotes, down=updated.downvotes)

            logger.info(
                "vote_conflict",
                target="comment",
                target_id=str(comment_id),
                attempt=attempt,
            )

        raise StoreError(
            f"Vote on comment {comment_id} could not be applied after "
            f"{self.max_attempts} attempts"
        )
