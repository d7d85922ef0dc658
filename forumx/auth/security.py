"""Locally signed identity tokens.

Production requests carry Firebase ID tokens. For local development and the
test suite the API also accepts HS256 tokens with the same claims shape
(``sub``, ``email``, ``name``, ``picture``), issued and checked here.
"""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt


DEFAULT_TOKEN_TTL = timedelta(hours=1)


def create_identity_token(
    email: str,
    uid: str,
    secret: str,
    algorithm: str = "HS256",
    name: str | None = None,
    picture: str | None = None,
    expires_delta: timedelta | None = None,
) -> str:
    """Create a signed identity token.

    Args:
        email: Verified email claim
        uid: Subject (identity provider user id)
        secret: Signing key
        algorithm: JWT algorithm
        name: Optional display name claim
        picture: Optional avatar URL claim
        expires_delta: Token lifetime (default 1 hour)

    Returns:
        Encoded JWT string
    """
    now = datetime.now(UTC)
    payload: dict[str, Any] = {
        "sub": uid,
        "email": email,
        "iat": now,
        "exp": now + (expires_delta or DEFAULT_TOKEN_TTL),
    }
    if name:
        payload["name"] = name
    if picture:
        payload["picture"] = picture
    return jwt.encode(payload, secret, algorithm=algorithm)


def decode_identity_token(
    token: str, secret: str, algorithm: str = "HS256"
) -> dict[str, Any]:
    """Decode and validate an identity token.

    Raises:
        JWTError: If the token is invalid, expired or badly signed.
    """
    return jwt.decode(token, secret, algorithms=[algorithm])
