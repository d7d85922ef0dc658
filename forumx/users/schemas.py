"""Pydantic schemas for users."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from forumx.auth.permissions import UserRole
from forumx.core.schemas import CamelModel

from .models import Badge, User


class LoginRequest(CamelModel):
    """Login upsert body sent by the client after identity sign-in."""

    email: str = Field(description="User email")
    uid: str | None = Field(None, description="Identity provider user id")
    name: str | None = Field(None, max_length=200)
    photo_url: str | None = Field(None, max_length=2000)


class LoginResponse(CamelModel):
    message: str
    user_id: UUID | None = None
    updated: bool | None = None


class UpdateUserRequest(CamelModel):
    name: str | None = Field(None, max_length=200)
    photo_url: str | None = Field(None, max_length=2000)


class UserResponse(CamelModel):
    """Public user document."""

    id: UUID
    email: str
    uid: str | None = None
    name: str | None = None
    photo_url: str | None = None
    role: UserRole
    membership: bool
    badge: Badge
    created_at: datetime
    last_login: datetime | None = None

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(
            id=user.user_id,
            email=user.email,
            uid=user.uid,
            name=user.name,
            photo_url=user.photo_url,
            role=user.role,
            membership=user.membership,
            badge=user.badge,
            created_at=user.created_at,
            last_login=user.last_login,
        )


class RoleToggleResponse(CamelModel):
    message: str
    role: UserRole
