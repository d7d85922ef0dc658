"""Vote state machine shared by posts and comments.

Each (user, target) pair is in one of three states: no vote, upvote or
downvote. A request carries the vote type the user clicked:

- no vote            -> the requested type
- same type again    -> no vote (retraction)
- the opposite type  -> the requested type (switch)

Aggregate counters are never incremented in place; they are recounted from
the per-user state after every transition.
"""

from collections.abc import Iterable
from dataclasses import dataclass
from enum import Enum


class VoteType(str, Enum):
    """Vote direction."""

    UPVOTE = "upvote"
    DOWNVOTE = "downvote"


def parse_vote_type(value: str | None) -> VoteType:
    """Validate a raw vote type string.

    Raises:
        ValueError: If the value is not ``upvote`` or ``downvote``.
    """
    return VoteType(value)


def transition(current: VoteType | None, requested: VoteType) -> VoteType | None:
    """Next vote state for a user who clicks ``requested``.

    Returns ``None`` when the click retracts the existing vote.
    """
    if current == requested:
        return None
    return requested


def tally(states: Iterable[VoteType]) -> tuple[int, int]:
    """Count (upvotes, downvotes) from per-user vote states."""
    up = down = 0
    for state in states:
        if state == VoteType.UPVOTE:
            up += 1
        else:
            down += 1
    return up, down


def apply_to_ledger(
    votes: dict[str, VoteType],
    user_email: str,
    requested: VoteType,
) -> dict[str, VoteType]:
    """Apply a vote to an email -> vote type mapping (post votes).

    Returns a new mapping; the input is left untouched.
    """
    updated = dict(votes)
    state = transition(updated.get(user_email), requested)
    if state is None:
        updated.pop(user_email, None)
    else:
        updated[user_email] = state
    return updated


def apply_to_voter_sets(
    upvoters: set[str],
    downvoters: set[str],
    user_email: str,
    requested: VoteType,
) -> tuple[set[str], set[str]]:
    """Apply a vote to the disjoint upvoter/downvoter sets (comment votes).

    Returns new sets; a user ends up in at most one of them.
    """
    if user_email in upvoters:
        current: VoteType | None = VoteType.UPVOTE
    elif user_email in downvoters:
        current = VoteType.DOWNVOTE
    else:
        current = None

    state = transition(current, requested)
    new_up = set(upvoters) - {user_email}
    new_down = set(downvoters) - {user_email}
    if state == VoteType.UPVOTE:
        new_up.add(user_email)
    elif state == VoteType.DOWNVOTE:
        new_down.add(user_email)
    return new_up, new_down


@dataclass(frozen=True)
class VoteCounts:
    """Aggregate counts after a vote was applied."""

    up: int
    down: int
