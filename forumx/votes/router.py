"""Vote API routes.

Both endpoints toggle the caller's vote and answer with the new totals.
"""

from uuid import UUID

from fastapi import APIRouter

from forumx.auth.dependencies import CurrentUser, ensure_caller_email

from .dependencies import VoteLedgerDep
from .schemas import CommentVoteResponse, PostVoteResponse, VoteRequest


router = APIRouter(tags=["votes"])


@router.patch(
    "/posts/vote/{post_id}",
    response_model=PostVoteResponse,
    summary="Upvote or downvote a post",
)
async def vote_post(
    post_id: UUID,
    body: VoteRequest,
    identity: CurrentUser,
    ledger: VoteLedgerDep,
) -> PostVoteResponse:
    ensure_caller_email(identity, body.user_email)
    counts = await ledger.vote_post(post_id, body.user_email, body.type)
    return PostVoteResponse(up_vote=counts.up, down_vote=counts.down)


@router.patch(
    "/comments/vote/{comment_id}",
    response_model=CommentVoteResponse,
    summary="Upvote or downvote a comment",
)
async def vote_comment(
    comment_id: UUID,
    body: VoteRequest,
    identity: CurrentUser,
    ledger: VoteLedgerDep,
) -> CommentVoteResponse:
    ensure_caller_email(identity, body.user_email)
    counts = await ledger.vote_comment(comment_id, body.user_email, body.type)
    return CommentVoteResponse(upvotes=counts.up, downvotes=counts.down)
