"""FastAPI dependencies for authentication.

Provides dependency injection for:
- Current identity extraction from the bearer token
- Caller account lookup (role, membership) in the users collection
- Admin-only access
- Ownership checks shared by the routers
"""

from typing import Annotated

from fastapi import Depends, Request

from forumx.core.context import set_user_email
from forumx.core.dependencies import service_from_state
from forumx.core.errors import ForbiddenError, UnauthorizedError
from forumx.store import ContentStore
from forumx.users.models import User

from .verifier import TokenVerifier, VerifiedIdentity


def get_token_from_header(request: Request) -> str | None:
    """Extract Bearer token from Authorization header.

    Args:
        request: FastAPI request

    Returns:
        Token string or None if not present
    """
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        return None

    expected_parts = 2
    parts = auth_header.split()
    if len(parts) != expected_parts or parts[0].lower() != "bearer":
        return None

    return parts[1]


def get_token_verifier(request: Request) -> TokenVerifier:
    return service_from_state(request, "token_verifier")


def get_content_store(request: Request) -> ContentStore:
    return service_from_state(request, "store")


StoreDep = Annotated[ContentStore, Depends(get_content_store)]


async def get_current_user(
    token: Annotated[str | None, Depends(get_token_from_header)],
    verifier: Annotated[TokenVerifier, Depends(get_token_verifier)],
) -> VerifiedIdentity:
    """Verify the bearer token and return the caller's identity.

    Raises:
        UnauthorizedError: If the token is missing or rejected.
    """
    if not token:
        raise UnauthorizedError("Unauthorized Access")

    identity = await verifier.verify(token)

    # Set email in context for logging
    set_user_email(identity.email)
    return identity


CurrentUser = Annotated[VerifiedIdentity, Depends(get_current_user)]


async def get_caller_account(identity: CurrentUser, store: StoreDep) -> User | None:
    """The caller's user document, or None if they never logged in."""
    return await store.get_user_by_email(identity.email)


async def require_admin(identity: CurrentUser, store: StoreDep) -> User:
    """Require the caller to be an admin in the users collection.

    Raises:
        ForbiddenError: Unknown user or non-admin role.
    """
    user = await store.get_user_by_email(identity.email)
    if user is None or not user.is_admin:
        raise ForbiddenError("Forbidden Access")
    return user


CallerAccount = Annotated[User | None, Depends(get_caller_account)]
AdminUser = Annotated[User, Depends(require_admin)]


def ensure_self_or_admin(
    identity: VerifiedIdentity, account: User | None, email: str
) -> None:
    """Allow access to ``email``'s resources only to that user or an admin."""
    if identity.email == email:
        return
    if account is not None and account.is_admin:
        return
    raise ForbiddenError("Forbidden Access")


def ensure_caller_email(identity: VerifiedIdentity, claimed_email: str | None) -> None:
    """Check that a non-empty email sent in a request body is the caller's own.

    Empty emails pass through so the service can reject them as invalid.
    """
    if claimed_email and claimed_email != identity.email:
        raise ForbiddenError("userEmail does not match the authenticated user")
