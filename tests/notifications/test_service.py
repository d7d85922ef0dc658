"""Tests for NotificationService."""

import json
from datetime import UTC, datetime, timedelta
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from forumx.core.errors import NotFoundError
from forumx.notifications.models import create_notification
from forumx.notifications.service import NotificationService
from tests.fakes import InMemoryContentStore


@pytest.fixture
def store() -> InMemoryContentStore:
    return InMemoryContentStore()


class TestCreate:
    """Tests for notification creation."""

    @pytest.mark.asyncio
    async def test_create_publishes_to_user_channel(self, store) -> None:
        redis = AsyncMock()
        service = NotificationService(store, redis=redis)
        notification = create_notification("a@x.com", "hello")

        assert await service.create(notification) is True

        channel, payload = redis.publish.await_args.args
        assert channel == "notifications:user:a@x.com"
        message = json.loads(payload)
        assert message["type"] == "notification"
        assert message["data"]["userEmail"] == "a@x.com"

    @pytest.mark.asyncio
    async def test_duplicate_id_is_not_published(self, store) -> None:
        redis = AsyncMock()
        service = NotificationService(store, redis=redis)
        notification = create_notification("a@x.com", "hello")
        await service.create(notification)

        assert await service.create(notification) is False
        assert redis.publish.await_count == 1

    @pytest.mark.asyncio
    async def test_publish_failure_is_ignored(self, store) -> None:
        redis = AsyncMock()
        redis.publish = AsyncMock(side_effect=ConnectionError("redis down"))
        service = NotificationService(store, redis=redis)

        assert await service.create(create_notification("a@x.com", "hello")) is True
        assert len(store.notifications) == 1


class TestReadState:
    """Tests for listing and read-state changes."""

    @pytest.mark.asyncio
    async def test_list_is_newest_first(self, store) -> None:
        service = NotificationService(store)
        older = create_notification("a@x.com", "first")
        older.date = datetime.now(UTC) - timedelta(hours=1)
        newer = create_notification("a@x.com", "second")
        other = create_notification("b@x.com", "not mine")
        for n in (older, newer, other):
            await service.create(n)

        listed = await service.list_for_user("a@x.com")

        assert [n.message for n in listed] == ["second", "first"]

    @pytest.mark.asyncio
    async def test_mark_all_read_and_clear(self, store) -> None:
        service = NotificationService(store)
        for i in range(3):
            await service.create(create_notification("a@x.com", f"n{i}"))
        await service.create(create_notification("b@x.com", "other"))

        assert await service.mark_all_read("a@x.com") == 3
        assert await service.mark_all_read("a@x.com") == 0
        assert await service.clear_all("a@x.com") == 3
        assert await service.list_for_user("a@x.com") == []
        assert len(await service.list_for_user("b@x.com")) == 1

    @pytest.mark.asyncio
    async def test_mark_read_already_read_is_noop(self, store) -> None:
        service = NotificationService(store)
        notification = create_notification("a@x.com", "hello")
        notification.read = True
        await service.create(notification)
        store.calls.clear()

        await service.mark_read(notification)

        assert "mark_notification_read" not in store.calls

    @pytest.mark.asyncio
    async def test_get_missing(self, store) -> None:
        with pytest.raises(NotFoundError, match="Notification not found"):
            await NotificationService(store).get(uuid4())
