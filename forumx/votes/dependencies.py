"""FastAPI dependencies for the vote ledger."""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.dependencies import service_from_state

from .service import VoteLedger


def get_vote_ledger(request: Request) -> VoteLedger:
    """Get VoteLedger from app state."""
    return service_from_state(request, "vote_ledger")


VoteLedgerDep = Annotated[VoteLedger, Depends(get_vote_ledger)]
