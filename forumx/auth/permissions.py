"""Role-based access control for Forum-X.

Two roles only: regular users and administrators. Roles live in the users
collection and are looked up by email on every admin-only request.
"""

from enum import Enum


class UserRole(str, Enum):
    """User roles."""

    USER = "user"
    ADMIN = "admin"


def toggled_role(role: UserRole | str) -> UserRole:
    """Return the opposite role (user <-> admin).

    Unknown role strings are treated as ``user`` and promoted.

    Examples:
        >>> toggled_role(UserRole.ADMIN)
        <UserRole.USER: 'user'>
        >>> toggled_role("user")
        <UserRole.ADMIN: 'admin'>
    """
    if isinstance(role, str):
        try:
            role = UserRole(role)
        except ValueError:
            role = UserRole.USER
    return UserRole.USER if role == UserRole.ADMIN else UserRole.ADMIN


def is_admin_role(role: UserRole | str | None) -> bool:
    """Check if a stored role string grants admin access."""
    return role in (UserRole.ADMIN, UserRole.ADMIN.value)
