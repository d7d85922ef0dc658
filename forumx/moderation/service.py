"""Moderation pipeline: comment report -> report record -> notification -> admin action.

Reporting touches three documents that cannot be written atomically, so it
runs as a saga of idempotent steps:

1. flag the comment as reported (an idempotent overwrite);
2. insert a Pending report whose id is derived from the idempotency key;
3. insert a notification to the comment author, id derived from the same key.

Steps 2 and 3 are insert-if-absent. Replaying a request with the same key
after a partial failure finishes the missing steps and never duplicates
the ones that already ran. Nothing is rolled back and nothing is retried
in-process: a failing step surfaces as a ``StoreError``.
"""

import asyncio
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import structlog
from redis.exceptions import RedisError

from forumx.comments.models import Comment
from forumx.core.errors import InvalidArgumentError, NotFoundError, RateLimitedError
from forumx.core.redis import report_claim_key, report_rate_key
from forumx.notifications.models import create_notification, report_message

from .models import (
    ACTION_RESULT,
    Report,
    ReportAction,
    can_transition,
    create_report,
    saga_ids,
)


if TYPE_CHECKING:
    from redis.asyncio import Redis

    from forumx.notifications.service import NotificationService
    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)


@dataclass
class ReportView:
    """A report with its comment resolved (None once the comment is gone)."""

    report: Report
    comment: Comment | None


class ModerationPipeline:
    """Report intake and admin resolution for comments."""

    RATE_WINDOW_SECONDS = 3600

    def __init__(
        self,
        store: "ContentStore",
        notifications: "NotificationService",
        redis: "Redis | None" = None,
        reports_per_hour: int = 5,
    ):
        self.store = store
        self.notifications = notifications
        self.redis = redis
        self.reports_per_hour = reports_per_hour

    # ==========================================================================
    # Rate Limiting (Redis-based)
    # ==========================================================================

    async def check_report_rate_limit(self, reporter_email: str, report_id: UUID) -> None:
        """Count a new report against the reporter's hourly budget.

        Each report id is counted once: replays of the same saga find their
        claim key already set and pass through. When Redis is unreachable
        the limit is not enforced.

        Raises:
            RateLimitedError: If the reporter exceeded ``reports_per_hour``.
        """
        if not self.redis:
            return

        claim = report_claim_key(str(report_id))
        key = report_rate_key(reporter_email)
        try:
            if not await self.redis.set(claim, 1, nx=True, ex=self.RATE_WINDOW_SECONDS):
                return
            count = await self.redis.incr(key)
            if count == 1:
                await self.redis.expire(key, self.RATE_WINDOW_SECONDS)
            if count > self.reports_per_hour:
                # Rejected requests must be counted again if retried
                await self.redis.delete(claim)
        except RedisError as e:
            logger.warning(
                "report_rate_limit_unavailable", reporter=reporter_email, error=str(e)
            )
            return

        if count > self.reports_per_hour:
            logger.warning("report_rate_limited", reporter=reporter_email, count=count)
            raise RateLimitedError("Report limit per hour exceeded")

    # ==========================================================================
    # Report intake
    # ==========================================================================

    async def report_comment(
        self,
        comment_id: UUID,
        reporter_email: str,
        reason: str,
        idempotency_key: str,
    ) -> Report:
        """Report a comment and notify its author.

        Raises:
            InvalidArgumentError: Reporter or reason missing.
            NotFoundError: Comment does not exist.
            RateLimitedError: Reporter exceeded the hourly report budget.
            StoreError: A write failed; replay with the same key to finish.
        """
        if not reporter_email or not reason or not reason.strip():
            raise InvalidArgumentError("userEmail and reason are required")

        comment = await self.store.get_comment(comment_id)
        if comment is None:
            raise NotFoundError("Comment not found")

        report_id, notification_id = saga_ids(comment_id, reporter_email, idempotency_key)

        # Replays are never counted twice against the limit
        existing = await self.store.get_report(report_id)
        if existing is None:
            await self.check_report_rate_limit(reporter_email, report_id)

        # Step 1: flag the comment
        await self.store.mark_comment_reported(comment_id)

        # Step 2: record the report
        report = existing or create_report(
            report_id=report_id,
            comment_id=comment_id,
            reported_by=reporter_email,
            reason=reason,
        )
        if existing is None and not await self.store.insert_report(report):
            # Lost an insert race with a concurrent replay; read the winner
            report = await self.store.get_report(report_id) or report

        # Step 3: notify the comment author
        notification = create_notification(
            user_email=comment.user_email,
            message=report_message(reason),
            notification_id=notification_id,
        )
        await self.notifications.create(notification)

        logger.info(
            "comment_reported",
            comment_id=str(comment_id),
            report_id=str(report.report_id),
            reporter=reporter_email,
            replay=existing is not None,
        )
        return report

    # ==========================================================================
    # Admin resolution
    # ==========================================================================

    async def list_reports(self) -> list[ReportView]:
        """Every report, newest first, with its comment resolved or None."""
        reports = sorted(await self.store.list_reports(), key=lambda r: r.date, reverse=True)
        comments = await asyncio.gather(
            *(self.store.get_comment(report.comment_id) for report in reports)
        )
        return [
            ReportView(report=report, comment=comment)
            for report, comment in zip(reports, comments, strict=True)
        ]

    async def resolve_report(self, report_id: UUID, action: str | ReportAction) -> Report:
        """Apply an admin action to a report.

        Raises:
            NotFoundError: Report does not exist.
            InvalidArgumentError: Unknown action, or the report's current
                status does not allow the resulting transition.
        """
        report = await self.store.get_report(report_id)
        if report is None:
            raise NotFoundError("Report not found")

        try:
            parsed = ReportAction(action)
        except ValueError as e:
            raise InvalidArgumentError("Invalid action") from e

        if report.is_terminal:
            raise InvalidArgumentError(f"Report is already {report.status.value}")

        target = ACTION_RESULT[parsed]
        if not can_transition(report.status, target):
            raise InvalidArgumentError(
                f"Report is {report.status.value} and cannot become {target.value}"
            )

        if parsed == ReportAction.DELETE_COMMENT:
            # Deleting an already-deleted comment is a no-op
            await self.store.delete_comment(report.comment_id)

        reviewed_at = datetime.now(UTC)
        await self.store.set_report_status(report_id, target, reviewed_at)

        logger.info(
            "report_resolved",
            report_id=str(report_id),
            action=parsed.value,
            status=target.value,
            comment_id=str(report.comment_id),
        )
        report.status = target
        report.reviewed_at = reviewed_at
        return report
