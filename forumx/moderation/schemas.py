"""Pydantic schemas for comment reports."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forumx.comments.schemas import CommentResponse
from forumx.core.schemas import CamelModel

from .models import ReportStatus
from .service import ReportView


class ReportRequest(CamelModel):
    user_email: str = ""
    reason: str = Field("", max_length=1000)


class ReportActionRequest(CamelModel):
    """``action`` is one of Reviewed, DeleteComment, WarnUser, Dismiss."""

    action: str = ""


class ReportResponse(CamelModel):
    """Report with ``commentId`` resolved to the comment, or null once deleted."""

    id: UUID
    comment_id: CommentResponse | None = None
    reported_by: str
    reason: str
    status: ReportStatus
    date: datetime
    reviewed_at: datetime | None = None

    @classmethod
    def from_view(cls, view: ReportView) -> "ReportResponse":
        report = view.report
        return cls(
            id=report.report_id,
            comment_id=(
                CommentResponse.from_comment(view.comment) if view.comment else None
            ),
            reported_by=report.reported_by,
            reason=report.reason,
            status=report.status,
            date=report.date,
            reviewed_at=report.reviewed_at,
        )
