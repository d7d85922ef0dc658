"""Vote ledger module.

Toggle votes on posts and comments with aggregate counts kept equal to the
per-user vote records.
"""

from .models import VoteCounts, VoteType, transition
from .service import VoteLedger


__all__ = [
    "VoteCounts",
    "VoteLedger",
    "VoteType",
    "transition",
]
