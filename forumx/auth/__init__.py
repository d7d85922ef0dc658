"""Authentication module.

Provides:
- Bearer token verification (Firebase ID tokens or HS256 identity tokens)
- Role lookup and admin-only access
- Ownership checks for user-scoped routes
"""

from .permissions import UserRole
from .verifier import TokenVerifier, VerifiedIdentity, build_token_verifier


__all__ = [
    "TokenVerifier",
    "UserRole",
    "VerifiedIdentity",
    "build_token_verifier",
]
