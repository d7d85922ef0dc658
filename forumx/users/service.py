"""User service layer.

Business logic for:
- Login upsert (create on first login, refresh last_login afterwards)
- Profile read and update
- Admin listing with name search
- Admin role toggling
"""

from datetime import UTC, datetime
from typing import TYPE_CHECKING
from uuid import UUID

import structlog

from forumx.auth.permissions import toggled_role
from forumx.core.errors import InvalidArgumentError, NotFoundError

from .models import User, create_user


if TYPE_CHECKING:
    from forumx.store import ContentStore


logger = structlog.get_logger(__name__)


class UserService:
    """Service for user management."""

    def __init__(self, store: "ContentStore"):
        self.store = store

    async def login(
        self,
        email: str,
        uid: str | None = None,
        name: str | None = None,
        photo_url: str | None = None,
    ) -> tuple[User, bool]:
        """Create the user on first login or refresh ``last_login``.

        Returns:
            Tuple of (user, created).
        """
        if not email:
            raise InvalidArgumentError("Email is required")

        existing = await self.store.get_user_by_email(email)
        if existing is not None:
            existing.last_login = datetime.now(UTC)
            await self.store.touch_last_login(email, existing.last_login)
            logger.info("user_login", email=email)
            return existing, False

        user = create_user(email=email, uid=uid, name=name, photo_url=photo_url)
        if not await self.store.insert_user(user):
            # Concurrent first login inserted the same email first
            winner = await self.store.get_user_by_email(email)
            return winner or user, False

        logger.info("user_created", email=email, user_id=str(user.user_id))
        return user, True

    async def get_by_email(self, email: str) -> User:
        user = await self.store.get_user_by_email(email)
        if user is None:
            raise NotFoundError("User not found")
        return user

    async def update_profile(
        self,
        email: str,
        name: str | None = None,
        photo_url: str | None = None,
    ) -> User:
        """Update name and/or photo; omitted fields keep their value."""
        user = await self.get_by_email(email)
        if name is not None:
            user.name = name
        if photo_url is not None:
            user.photo_url = photo_url
        await self.store.update_user_profile(email, user.name, user.photo_url)
        logger.info("user_profile_updated", email=email)
        return user

    async def search(self, query: str | None = None) -> list[User]:
        """List users, optionally filtered by case-insensitive name substring."""
        users = await self.store.list_users()
        if query:
            needle = query.lower()
            users = [u for u in users if u.name and needle in u.name.lower()]
        return users

    async def toggle_role(self, user_id: UUID) -> User:
        """Flip a user between ``user`` and ``admin``."""
        user = await self.store.get_user(user_id)
        if user is None:
            raise NotFoundError("User not found")

        user.role = toggled_role(user.role)
        await self.store.set_user_role(user.email, user.role)
        logger.info("user_role_toggled", email=user.email, role=user.role.value)
        return user
