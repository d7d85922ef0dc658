"""Tests for identity tokens and verifiers."""

from datetime import timedelta
from types import SimpleNamespace

import pytest
from jose import JWTError

from forumx.auth.permissions import UserRole, is_admin_role, toggled_role
from forumx.auth.security import create_identity_token, decode_identity_token
from forumx.auth.verifier import (
    FirebaseTokenVerifier,
    JwtTokenVerifier,
    build_token_verifier,
)
from forumx.core.errors import UnauthorizedError


SECRET = "test-secret-key-with-enough-length-32!"


class TestIdentityToken:
    """Tests for token creation and decoding."""

    def test_round_trip_claims(self) -> None:
        token = create_identity_token("a@x.com", "uid-1", SECRET, name="Ann")
        claims = decode_identity_token(token, SECRET)
        assert claims["sub"] == "uid-1"
        assert claims["email"] == "a@x.com"
        assert claims["name"] == "Ann"
        assert "picture" not in claims

    def test_wrong_secret_is_rejected(self) -> None:
        token = create_identity_token("a@x.com", "uid-1", SECRET)
        with pytest.raises(JWTError):
            decode_identity_token(token, "another-secret-key-of-enough-length")

    def test_expired_token_is_rejected(self) -> None:
        token = create_identity_token(
            "a@x.com", "uid-1", SECRET, expires_delta=timedelta(seconds=-1)
        )
        with pytest.raises(JWTError):
            decode_identity_token(token, SECRET)


class TestJwtTokenVerifier:
    """Tests for the HS256 verifier."""

    @pytest.mark.asyncio
    async def test_valid_token(self) -> None:
        verifier = JwtTokenVerifier(SECRET)
        token = create_identity_token("a@x.com", "uid-1", SECRET, picture="p.png")

        identity = await verifier.verify(token)

        assert identity.email == "a@x.com"
        assert identity.uid == "uid-1"
        assert identity.picture == "p.png"

    @pytest.mark.asyncio
    async def test_garbage_token(self) -> None:
        with pytest.raises(UnauthorizedError, match="Invalid Token"):
            await JwtTokenVerifier(SECRET).verify("not-a-jwt")

    @pytest.mark.asyncio
    async def test_token_without_email(self) -> None:
        token = create_identity_token("", "uid-1", SECRET)
        with pytest.raises(UnauthorizedError):
            await JwtTokenVerifier(SECRET).verify(token)


class TestBuildTokenVerifier:
    """Tests for verifier selection."""

    def _settings(self, provider: str) -> SimpleNamespace:
        return SimpleNamespace(
            auth_provider=provider,
            auth_jwt_secret=SECRET,
            auth_jwt_algorithm="HS256",
            firebase_credentials_path=None,
            firebase_project_id="forumx",
        )

    def test_jwt_provider(self) -> None:
        assert isinstance(build_token_verifier(self._settings("jwt")), JwtTokenVerifier)

    def test_firebase_provider(self) -> None:
        verifier = build_token_verifier(self._settings("firebase"))
        assert isinstance(verifier, FirebaseTokenVerifier)


class TestRoles:
    """Tests for role helpers."""

    def test_toggle(self) -> None:
        assert toggled_role(UserRole.USER) == UserRole.ADMIN
        assert toggled_role(UserRole.ADMIN) == UserRole.USER

    def test_is_admin_role(self) -> None:
        assert is_admin_role("admin") is True
        assert is_admin_role("user") is False
