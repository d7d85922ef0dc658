"""User accounts: login upsert, profiles, roles and membership badges."""

from .models import USERS_TABLES_CQL, Badge, User, create_user
from .service import UserService


__all__ = [
    "USERS_TABLES_CQL",
    "Badge",
    "User",
    "UserService",
    "create_user",
]
