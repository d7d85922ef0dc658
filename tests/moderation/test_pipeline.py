"""Tests for the comment report pipeline."""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest
import pytest_asyncio
from redis.exceptions import ConnectionError as RedisConnectionError

from forumx.comments.models import create_comment
from forumx.core.errors import (
    InvalidArgumentError,
    NotFoundError,
    RateLimitedError,
    StoreError,
)
from forumx.moderation.models import ReportStatus, create_report, saga_ids
from forumx.moderation.service import ModerationPipeline
from forumx.notifications.service import NotificationService
from tests.fakes import FakeRedis, InMemoryContentStore


AUTHOR = "author@x.com"
REPORTER = "reporter@x.com"


@pytest.fixture
def store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def comment(store):
    comment = create_comment(post_id=uuid4(), text="rude", user_email=AUTHOR)
    store.comments[comment.comment_id] = comment
    return comment


@pytest.fixture
def pipeline(store) -> ModerationPipeline:
    return ModerationPipeline(store, NotificationService(store))


@pytest.fixture
def mock_redis() -> AsyncMock:
    redis = AsyncMock()
    redis.set = AsyncMock(return_value=True)
    redis.incr = AsyncMock(return_value=1)
    redis.expire = AsyncMock(return_value=True)
    redis.delete = AsyncMock(return_value=1)
    return redis


class TestReportComment:
    """Tests for report intake."""

    @pytest.mark.asyncio
    async def test_report_flags_records_and_notifies(self, store, pipeline, comment) -> None:
        """One report touches the comment, the reports table and the author's inbox."""
        report = await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert store.comments[comment.comment_id].reported is True
        assert report.status == ReportStatus.PENDING
        assert report.reported_by == REPORTER
        assert list(store.reports) == [report.report_id]

        notifications = list(store.notifications.values())
        assert len(notifications) == 1
        assert notifications[0].user_email == AUTHOR
        assert notifications[0].message == 'Your comment has been reported for: "spam"'
        assert notifications[0].read is False

    @pytest.mark.asyncio
    async def test_missing_comment_writes_nothing(self, store, pipeline) -> None:
        with pytest.raises(NotFoundError, match="Comment not found"):
            await pipeline.report_comment(uuid4(), REPORTER, "spam", "k1")
        assert store.reports == {}
        assert store.notifications == {}

    @pytest.mark.parametrize(("email", "reason"), [("", "spam"), (REPORTER, ""), (REPORTER, "  ")])
    @pytest.mark.asyncio
    async def test_missing_fields_are_rejected(self, store, pipeline, comment, email, reason) -> None:
        with pytest.raises(InvalidArgumentError):
            await pipeline.report_comment(comment.comment_id, email, reason, "k1")
        assert store.comments[comment.comment_id].reported is False

    @pytest.mark.asyncio
    async def test_same_key_is_idempotent(self, store, pipeline, comment) -> None:
        first = await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")
        second = await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert first.report_id == second.report_id
        assert len(store.reports) == 1
        assert len(store.notifications) == 1

    @pytest.mark.asyncio
    async def test_different_keys_create_separate_reports(self, store, pipeline, comment) -> None:
        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")
        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k2")

        assert len(store.reports) == 2
        assert len(store.notifications) == 2

    @pytest.mark.asyncio
    async def test_replay_completes_after_notification_failure(
        self, store, pipeline, comment
    ) -> None:
        """A failed notification step is finished by replaying the request."""
        store.fail_next("insert_notification")
        with pytest.raises(StoreError):
            await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        report_id, notification_id = saga_ids(comment.comment_id, REPORTER, "k1")
        assert store.comments[comment.comment_id].reported is True
        assert list(store.reports) == [report_id]
        assert store.notifications == {}

        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert list(store.reports) == [report_id]
        assert list(store.notifications) == [notification_id]

    @pytest.mark.asyncio
    async def test_replay_after_report_insert_failure(self, store, pipeline, comment) -> None:
        store.fail_next("insert_report")
        with pytest.raises(StoreError):
            await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")
        assert store.reports == {}
        assert store.notifications == {}

        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")
        assert len(store.reports) == 1
        assert len(store.notifications) == 1


class TestReportRateLimit:
    """Tests for the per-reporter hourly limit."""

    @pytest.mark.asyncio
    async def test_first_report_sets_window(self, store, comment, mock_redis) -> None:
        pipeline = ModerationPipeline(store, NotificationService(store), redis=mock_redis)

        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        mock_redis.incr.assert_awaited_once_with(f"reports:rate:{REPORTER}")
        mock_redis.expire.assert_awaited_once_with(f"reports:rate:{REPORTER}", 3600)

    @pytest.mark.asyncio
    async def test_over_limit_is_rejected(self, store, comment, mock_redis) -> None:
        mock_redis.incr = AsyncMock(return_value=6)
        pipeline = ModerationPipeline(
            store, NotificationService(store), redis=mock_redis, reports_per_hour=5
        )

        with pytest.raises(RateLimitedError, match="Report limit per hour exceeded"):
            await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")
        assert store.reports == {}
        assert store.comments[comment.comment_id].reported is False

    @pytest.mark.asyncio
    async def test_replay_does_not_count_against_limit(self, store, comment, mock_redis) -> None:
        pipeline = ModerationPipeline(store, NotificationService(store), redis=mock_redis)

        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")
        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert mock_redis.incr.await_count == 1

    @pytest.mark.asyncio
    async def test_replay_after_failed_insert_is_not_counted(self, store, comment) -> None:
        """A reporter at the limit can still finish a saga whose report insert failed."""
        redis = FakeRedis()
        pipeline = ModerationPipeline(
            store, NotificationService(store), redis=redis, reports_per_hour=1
        )
        store.fail_next("insert_report")
        with pytest.raises(StoreError):
            await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        report = await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert list(store.reports) == [report.report_id]
        assert len(store.notifications) == 1
        assert redis.values[f"reports:rate:{REPORTER}"] == 1

    @pytest.mark.asyncio
    async def test_rejected_report_stays_rejected_on_retry(self, store, comment) -> None:
        redis = FakeRedis()
        pipeline = ModerationPipeline(
            store, NotificationService(store), redis=redis, reports_per_hour=1
        )
        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        for _ in range(2):
            with pytest.raises(RateLimitedError):
                await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k2")
        assert len(store.reports) == 1

    @pytest.mark.asyncio
    async def test_redis_outage_skips_limit(self, store, comment, mock_redis) -> None:
        mock_redis.set = AsyncMock(side_effect=RedisConnectionError("redis down"))
        pipeline = ModerationPipeline(store, NotificationService(store), redis=mock_redis)

        report = await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert report.status == ReportStatus.PENDING
        assert len(store.notifications) == 1
        mock_redis.incr.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_redis_failure_mid_count_skips_limit(self, store, comment, mock_redis) -> None:
        mock_redis.incr = AsyncMock(side_effect=RedisConnectionError("redis down"))
        pipeline = ModerationPipeline(store, NotificationService(store), redis=mock_redis)

        await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

        assert len(store.reports) == 1


class TestResolveReport:
    """Tests for admin actions."""

    @pytest_asyncio.fixture
    async def report(self, pipeline, comment):
        return await pipeline.report_comment(comment.comment_id, REPORTER, "spam", "k1")

    @pytest.mark.asyncio
    async def test_delete_comment_action(self, store, pipeline, comment, report) -> None:
        resolved = await pipeline.resolve_report(report.report_id, "DeleteComment")

        assert resolved.status == ReportStatus.ACTION_TAKEN
        assert resolved.reviewed_at is not None
        assert comment.comment_id not in store.comments
        assert store.reports[report.report_id].status == ReportStatus.ACTION_TAKEN

        views = await pipeline.list_reports()
        assert len(views) == 1
        assert views[0].comment is None

    @pytest.mark.parametrize(
        ("action", "status"),
        [
            ("Reviewed", ReportStatus.REVIEWED),
            ("WarnUser", ReportStatus.ACTION_TAKEN),
            ("Dismiss", ReportStatus.DISMISSED),
        ],
    )
    @pytest.mark.asyncio
    async def test_actions_keep_comment(self, store, pipeline, comment, report, action, status) -> None:
        resolved = await pipeline.resolve_report(report.report_id, action)
        assert resolved.status == status
        assert comment.comment_id in store.comments

    @pytest.mark.asyncio
    async def test_reviewed_then_dismissed(self, pipeline, report) -> None:
        await pipeline.resolve_report(report.report_id, "Reviewed")
        resolved = await pipeline.resolve_report(report.report_id, "Dismiss")
        assert resolved.status == ReportStatus.DISMISSED

    @pytest.mark.asyncio
    async def test_terminal_report_cannot_change(self, pipeline, report) -> None:
        await pipeline.resolve_report(report.report_id, "Dismiss")
        with pytest.raises(InvalidArgumentError, match="already Dismissed"):
            await pipeline.resolve_report(report.report_id, "WarnUser")

    @pytest.mark.parametrize(
        ("status", "terminal"),
        [
            (ReportStatus.PENDING, False),
            (ReportStatus.REVIEWED, False),
            (ReportStatus.ACTION_TAKEN, True),
            (ReportStatus.DISMISSED, True),
        ],
    )
    def test_terminal_statuses(self, status, terminal) -> None:
        report = create_report(
            report_id=uuid4(), comment_id=uuid4(), reported_by=REPORTER, reason="spam"
        )
        report.status = status
        assert report.is_terminal is terminal

    @pytest.mark.asyncio
    async def test_unknown_action(self, pipeline, report) -> None:
        with pytest.raises(InvalidArgumentError, match="Invalid action"):
            await pipeline.resolve_report(report.report_id, "Ban")

    @pytest.mark.asyncio
    async def test_unknown_report(self, pipeline) -> None:
        with pytest.raises(NotFoundError, match="Report not found"):
            await pipeline.resolve_report(uuid4(), "Dismiss")

    @pytest.mark.asyncio
    async def test_delete_comment_twice_is_harmless(self, store, pipeline, comment, report) -> None:
        """Deleting an already deleted comment does not fail the action."""
        del store.comments[comment.comment_id]
        resolved = await pipeline.resolve_report(report.report_id, "DeleteComment")
        assert resolved.status == ReportStatus.ACTION_TAKEN
