"""Comment API routes."""

from uuid import UUID

from fastapi import APIRouter, Query, status

from forumx.auth.dependencies import CallerAccount, CurrentUser, ensure_caller_email
from forumx.core.schemas import MessageResponse

from .dependencies import CommentServiceDep
from .schemas import (
    CommentCreatedResponse,
    CommentResponse,
    CreateCommentRequest,
    UpdateCommentRequest,
)


router = APIRouter(prefix="/comments", tags=["comments"])


@router.get("", response_model=list[CommentResponse], summary="List a post's comments")
async def list_comments(
    service: CommentServiceDep,
    post_id: UUID = Query(alias="postId"),
) -> list[CommentResponse]:
    comments = await service.list_for_post(post_id)
    return [CommentResponse.from_comment(comment) for comment in comments]


@router.post(
    "",
    response_model=CommentCreatedResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add a comment or reply",
)
async def create_comment(
    body: CreateCommentRequest,
    identity: CurrentUser,
    service: CommentServiceDep,
) -> CommentCreatedResponse:
    ensure_caller_email(identity, body.user_email)
    comment = await service.create(
        post_id=body.post_id,
        text=body.text,
        user_email=identity.email,
        user_name=body.user_name or identity.name,
        user_photo=body.user_photo or identity.picture,
        parent_id=body.parent_id,
    )
    return CommentCreatedResponse(message="Comment added", comment_id=comment.comment_id)


@router.patch("/{comment_id}", response_model=MessageResponse, summary="Edit own comment")
async def update_comment(
    comment_id: UUID,
    body: UpdateCommentRequest,
    identity: CurrentUser,
    service: CommentServiceDep,
) -> MessageResponse:
    await service.update_text(comment_id, identity.email, body.text)
    return MessageResponse(message="Comment updated successfully")


@router.delete("/{comment_id}", response_model=MessageResponse, summary="Delete a comment")
async def delete_comment(
    comment_id: UUID,
    identity: CurrentUser,
    account: CallerAccount,
    service: CommentServiceDep,
) -> MessageResponse:
    await service.delete(comment_id, identity.email, caller=account)
    return MessageResponse(message="Comment deleted successfully")
