"""Tests for ContentStore with a mocked Cassandra session."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock
from uuid import uuid4

import pytest
from cassandra import OperationTimedOut
from cassandra.cluster import NoHostAvailable, Session

from forumx.core.errors import StoreError
from forumx.notifications.models import create_notification
from forumx.posts.models import create_post
from forumx.store import ContentStore
from forumx.users.models import Badge
from forumx.votes.models import VoteType


@pytest.fixture
def mock_session() -> Mock:
    """Cassandra session whose prepared statements remember their CQL."""
    session = Mock(spec=Session)
    session.prepare = Mock(side_effect=lambda cql: SimpleNamespace(cql=cql))
    session.aexecute = AsyncMock(return_value=Mock())
    return session


@pytest.fixture
def store(mock_session) -> ContentStore:
    return ContentStore(mock_session, "forumx")


def executed_cql(mock_session: Mock) -> str:
    statement = mock_session.aexecute.await_args.args[0]
    return " ".join(statement.cql.split())


class TestStatements:
    """Tests for statement preparation."""

    def test_statements_use_keyspace(self, mock_session, store) -> None:
        for call in mock_session.prepare.call_args_list:
            cql = call.args[0]
            assert "forumx." in cql


class TestErrorTranslation:
    """Driver failures surface as StoreError."""

    @pytest.mark.asyncio
    async def test_timeout_becomes_store_error(self, mock_session, store) -> None:
        mock_session.aexecute = AsyncMock(side_effect=OperationTimedOut("timed out"))
        with pytest.raises(StoreError, match="timed out"):
            await store.get_post(uuid4())

    @pytest.mark.asyncio
    async def test_no_host_becomes_store_error(self, mock_session, store) -> None:
        mock_session.aexecute = AsyncMock(side_effect=NoHostAvailable("down", {}))
        with pytest.raises(StoreError):
            await store.count_posts()


class TestReads:
    """Tests for row mapping."""

    @pytest.mark.asyncio
    async def test_get_post_maps_vote_map(self, mock_session, store) -> None:
        post = create_post(author_email="a@x.com", title="T")
        row = SimpleNamespace(
            post_id=post.post_id,
            author_email="a@x.com",
            author_name=None,
            author_photo=None,
            title="T",
            body=None,
            tags=None,
            created_at=post.created_at,
            votes={"b@x.com": "upvote"},
            up_vote=1,
            down_vote=0,
            version=3,
        )
        mock_session.aexecute = AsyncMock(return_value=Mock(one=Mock(return_value=row)))

        loaded = await store.get_post(post.post_id)

        assert loaded is not None
        assert loaded.votes == {"b@x.com": VoteType.UPVOTE}
        assert loaded.tags == []
        assert loaded.version == 3

    @pytest.mark.asyncio
    async def test_get_missing_post(self, mock_session, store) -> None:
        mock_session.aexecute = AsyncMock(return_value=Mock(one=Mock(return_value=None)))
        assert await store.get_post(uuid4()) is None

    @pytest.mark.asyncio
    async def test_count_users_by_badge(self, mock_session, store) -> None:
        mock_session.aexecute = AsyncMock(
            return_value=Mock(one=Mock(return_value=SimpleNamespace(count=7)))
        )
        assert await store.count_users(Badge.GOLD) == 7
        assert mock_session.aexecute.await_args.args[1] == ["gold"]


class TestVoteWrites:
    """Tests for plain and conditional vote writes."""

    @pytest.mark.asyncio
    async def test_plain_write_always_applies(self, mock_session, store) -> None:
        post = create_post(author_email="a@x.com", title="T")
        updated = post.with_votes({"b@x.com": VoteType.DOWNVOTE})

        assert await store.save_post_votes(updated, expected_version=None) is True
        assert "IF version" not in executed_cql(mock_session)
        params = mock_session.aexecute.await_args.args[1]
        assert params[0] == {"b@x.com": "downvote"}
        assert params[1:4] == [0, 1, 1]

    @pytest.mark.asyncio
    async def test_conditional_write_reports_conflict(self, mock_session, store) -> None:
        post = create_post(author_email="a@x.com", title="T")
        mock_session.aexecute = AsyncMock(return_value=Mock(was_applied=False))

        applied = await store.save_post_votes(post.with_votes({}), expected_version=0)

        assert applied is False
        assert "IF version = ?" in executed_cql(mock_session)
        assert mock_session.aexecute.await_args.args[1][-1] == 0


class TestInsertIfAbsent:
    """Tests for idempotent inserts."""

    @pytest.mark.asyncio
    async def test_duplicate_notification_is_not_applied(self, mock_session, store) -> None:
        mock_session.aexecute = AsyncMock(return_value=Mock(was_applied=False))
        notification = create_notification("a@x.com", "hello")

        assert await store.insert_notification(notification) is False
        assert "IF NOT EXISTS" in executed_cql(mock_session)
