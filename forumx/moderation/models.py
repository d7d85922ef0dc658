"""Database models for comment reports.

Report lifecycle:

    Pending --> Reviewed --> ActionTaken
       |            |
       |            +-----> Dismissed
       +--> ActionTaken
       +--> Dismissed

ActionTaken and Dismissed are terminal. Reports reference comments by id only;
the comment may be deleted while the report lives on.
"""

from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Any
from uuid import UUID, uuid5


class ReportStatus(str, Enum):
    """Report moderation status."""

    PENDING = "Pending"
    REVIEWED = "Reviewed"
    ACTION_TAKEN = "ActionTaken"
    DISMISSED = "Dismissed"


class ReportAction(str, Enum):
    """Admin actions on a report."""

    REVIEWED = "Reviewed"
    DELETE_COMMENT = "DeleteComment"
    WARN_USER = "WarnUser"
    DISMISS = "Dismiss"


ACTION_RESULT: dict[ReportAction, ReportStatus] = {
    ReportAction.REVIEWED: ReportStatus.REVIEWED,
    ReportAction.DELETE_COMMENT: ReportStatus.ACTION_TAKEN,
    ReportAction.WARN_USER: ReportStatus.ACTION_TAKEN,
    ReportAction.DISMISS: ReportStatus.DISMISSED,
}

ALLOWED_TRANSITIONS: dict[ReportStatus, frozenset[ReportStatus]] = {
    ReportStatus.PENDING: frozenset(
        {ReportStatus.REVIEWED, ReportStatus.ACTION_TAKEN, ReportStatus.DISMISSED}
    ),
    ReportStatus.REVIEWED: frozenset(
        {ReportStatus.ACTION_TAKEN, ReportStatus.DISMISSED}
    ),
    ReportStatus.ACTION_TAKEN: frozenset(),
    ReportStatus.DISMISSED: frozenset(),
}


def can_transition(current: ReportStatus, target: ReportStatus) -> bool:
    """Check if a report may move from ``current`` to ``target``."""
    return target in ALLOWED_TRANSITIONS[current]


# Namespace for ids derived from idempotency keys
REPORT_ID_NAMESPACE = UUID("6f1c3d2e-8b7a-5c4d-9e0f-1a2b3c4d5e6f")


def saga_ids(comment_id: UUID, reporter_email: str, key: str) -> tuple[UUID, UUID]:
    """Deterministic (report_id, notification_id) for one report request.

    The same comment, reporter and idempotency key always map to the same
    pair, so a replayed request hits the existing documents.
    """
    base = f"{comment_id}:{reporter_email}:{key}"
    return (
        uuid5(REPORT_ID_NAMESPACE, f"report:{base}"),
        uuid5(REPORT_ID_NAMESPACE, f"notification:{base}"),
    )


# ==============================================================================
# CQL Table Definitions
# ==============================================================================

REPORTS_TABLE_CQL = """
CREATE TABLE IF NOT EXISTS {keyspace}.reports (
    report_id UUID PRIMARY KEY,
    comment_id UUID,
    reported_by TEXT,
    reason TEXT,
    status TEXT,
    date TIMESTAMP,
    reviewed_at TIMESTAMP
)
"""

REPORTS_STATUS_INDEX_CQL = """
CREATE INDEX IF NOT EXISTS reports_status_idx
ON {keyspace}.reports (status)
"""

MODERATION_TABLES_CQL = [
    REPORTS_TABLE_CQL,
    REPORTS_STATUS_INDEX_CQL,
]


# ==============================================================================
# Entity Classes
# ==============================================================================


@dataclass
class Report:
    """A user report against a comment."""

    report_id: UUID
    comment_id: UUID
    reported_by: str
    reason: str
    status: ReportStatus
    date: datetime
    reviewed_at: datetime | None = None

    @property
    def is_terminal(self) -> bool:
        return not ALLOWED_TRANSITIONS[self.status]

    @classmethod
    def from_row(cls, row: Any) -> "Report":
        """Create Report from Cassandra row."""
        return cls(
            report_id=row.report_id,
            comment_id=row.comment_id,
            reported_by=row.reported_by,
            reason=row.reason,
            status=ReportStatus(row.status),
            date=row.date,
            reviewed_at=row.reviewed_at,
        )


def create_report(
    report_id: UUID,
    comment_id: UUID,
    reported_by: str,
    reason: str,
) -> Report:
    """Create a new pending report."""
    return Report(
        report_id=report_id,
        comment_id=comment_id,
        reported_by=reported_by,
        reason=reason,
        status=ReportStatus.PENDING,
        date=datetime.now(UTC),
    )
