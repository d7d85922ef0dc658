"""Identity-token verifiers.

Both verifiers turn a bearer token into a ``VerifiedIdentity`` or raise
``UnauthorizedError``; nothing else about the token is trusted.
"""

import asyncio
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING, Any, Protocol

import structlog
from jose import JWTError

from forumx.core.errors import UnauthorizedError

from .security import decode_identity_token


if TYPE_CHECKING:
    from forumx.config import Settings


logger = structlog.get_logger(__name__)


@dataclass(frozen=True)
class VerifiedIdentity:
    """Claims of a verified identity token."""

    uid: str
    email: str
    name: str | None = None
    picture: str | None = None


def _identity_from_claims(claims: dict[str, Any]) -> VerifiedIdentity:
    email = claims.get("email")
    uid = claims.get("uid") or claims.get("sub")
    if not email or not uid:
        raise UnauthorizedError("Invalid Token")
    return VerifiedIdentity(
        uid=uid,
        email=email,
        name=claims.get("name"),
        picture=claims.get("picture"),
    )


class TokenVerifier(Protocol):
    async def verify(self, token: str) -> VerifiedIdentity: ...


class JwtTokenVerifier:
    """Verifies HS256 tokens signed with ``auth_jwt_secret``."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        self._secret = secret
        self._algorithm = algorithm

    async def verify(self, token: str) -> VerifiedIdentity:
        try:
            claims = decode_identity_token(token, self._secret, self._algorithm)
        except JWTError as e:
            logger.info("token_rejected", error=str(e))
            raise UnauthorizedError("Invalid Token") from e
        return _identity_from_claims(claims)


class FirebaseTokenVerifier:
    """Verifies Firebase ID tokens with the Firebase Admin SDK."""

    def __init__(self, settings: "Settings"):
        self._credentials_path = settings.firebase_credentials_path
        self._project_id = settings.firebase_project_id
        self._app = None

    def _get_app(self):
        if self._app is not None:
            return self._app

        # Lazy import to avoid loading Firebase SDK unless needed
        import firebase_admin  # noqa: PLC0415
        from firebase_admin import credentials  # noqa: PLC0415

        options = {"projectId": self._project_id} if self._project_id else None
        try:
            self._app = firebase_admin.get_app()
        except ValueError:
            cred = (
                credentials.Certificate(str(Path(self._credentials_path)))
                if self._credentials_path
                else None
            )
            self._app = firebase_admin.initialize_app(cred, options)
            logger.info("firebase_initialized", project_id=self._project_id)
        return self._app

    async def verify(self, token: str) -> VerifiedIdentity:
        from firebase_admin import auth  # noqa: PLC0415
        from firebase_admin.exceptions import FirebaseError  # noqa: PLC0415

        app = self._get_app()
        try:
            claims = await asyncio.to_thread(auth.verify_id_token, token, app)
        except (ValueError, FirebaseError) as e:
            logger.info("token_rejected", error=str(e))
            raise UnauthorizedError("Invalid Token") from e
        return _identity_from_claims(claims)


def build_token_verifier(settings: "Settings") -> TokenVerifier:
    """Pick the verifier configured by ``auth_provider``."""
    if settings.auth_provider == "jwt":
        return JwtTokenVerifier(settings.auth_jwt_secret, settings.auth_jwt_algorithm)
    return FirebaseTokenVerifier(settings)
