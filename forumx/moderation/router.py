"""Moderation API routes.

Endpoints for:
- PATCH /comments/report/{comment_id} - Report a comment
- GET /admin/reports - List reports (admin)
- PATCH /admin/reports/{report_id}/action - Resolve a report (admin)
"""

from uuid import UUID

from fastapi import APIRouter, Header

from forumx.auth.dependencies import AdminUser, CurrentUser, ensure_caller_email
from forumx.core.context import get_request_id
from forumx.core.schemas import MessageResponse

from .dependencies import ModerationDep
from .schemas import ReportActionRequest, ReportRequest, ReportResponse


router = APIRouter(tags=["moderation"])
admin_router = APIRouter(prefix="/admin/reports", tags=["admin"])


@router.patch(
    "/comments/report/{comment_id}",
    response_model=MessageResponse,
    summary="Report a comment",
)
async def report_comment(
    comment_id: UUID,
    body: ReportRequest,
    identity: CurrentUser,
    pipeline: ModerationDep,
    idempotency_key: str | None = Header(default=None, alias="Idempotency-Key"),
) -> MessageResponse:
    """Flag the comment, file a report and notify the author.

    Resending the same ``Idempotency-Key`` after a failure completes the
    remaining steps without duplicating the report or notification.
    """
    ensure_caller_email(identity, body.user_email)
    await pipeline.report_comment(
        comment_id=comment_id,
        reporter_email=body.user_email,
        reason=body.reason,
        idempotency_key=idempotency_key or get_request_id(),
    )
    return MessageResponse(message="Comment reported and notification sent successfully")


@admin_router.get("", response_model=list[ReportResponse], summary="List reports")
async def list_reports(_admin: AdminUser, pipeline: ModerationDep) -> list[ReportResponse]:
    views = await pipeline.list_reports()
    return [ReportResponse.from_view(view) for view in views]


@admin_router.patch(
    "/{report_id}/action",
    response_model=MessageResponse,
    summary="Take action on a report",
)
async def resolve_report(
    report_id: UUID,
    body: ReportActionRequest,
    _admin: AdminUser,
    pipeline: ModerationDep,
) -> MessageResponse:
    await pipeline.resolve_report(report_id, body.action)
    return MessageResponse(message="Action taken successfully")
