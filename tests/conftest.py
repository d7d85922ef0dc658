"""Shared fixtures.

The app is built with ``create_app()`` and wired to an in-memory store and
the HS256 token verifier. ``TestClient`` is used without a ``with`` block so
the lifespan (Cassandra, Redis) never runs.
"""

import os
import tempfile
from collections.abc import Callable
from types import SimpleNamespace
from unittest.mock import AsyncMock, Mock

import pytest


os.environ.setdefault("ENVIRONMENT", "testing")
os.environ.setdefault("AUTH_PROVIDER", "jwt")
os.environ.setdefault("LOG_REQUESTS", "false")
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="forumx-logs-"))

from fastapi.testclient import TestClient  # noqa: E402

from forumx.auth.permissions import UserRole  # noqa: E402
from forumx.auth.security import create_identity_token  # noqa: E402
from forumx.auth.verifier import JwtTokenVerifier  # noqa: E402
from forumx.config import Settings, get_settings  # noqa: E402
from forumx.main import build_services, create_app  # noqa: E402
from forumx.users.models import User, create_user  # noqa: E402
from tests.fakes import InMemoryContentStore  # noqa: E402


STRIPE_SECRET = "sk_test_forumx"


@pytest.fixture
def settings() -> Settings:
    return get_settings().model_copy(update={"stripe_secret_key": STRIPE_SECRET})


@pytest.fixture
def store() -> InMemoryContentStore:
    return InMemoryContentStore()


@pytest.fixture
def stripe_client() -> Mock:
    """Stands in for ``stripe.StripeClient``; every intent gets a fixed secret."""
    client = Mock()
    client.payment_intents.create_async = AsyncMock(
        return_value=SimpleNamespace(id="pi_123", client_secret="pi_123_secret")
    )
    return client


@pytest.fixture
def client(
    store: InMemoryContentStore,
    settings: Settings,
    stripe_client: Mock,
) -> TestClient:
    app = create_app()
    build_services(
        app,
        store=store,
        settings=settings,
        verifier=JwtTokenVerifier(settings.auth_jwt_secret, settings.auth_jwt_algorithm),
        stripe_client=stripe_client,
    )
    return TestClient(app)


@pytest.fixture
def auth_headers(settings: Settings) -> Callable[..., dict[str, str]]:
    """Build an Authorization header for an identity."""

    def _headers(email: str, uid: str | None = None) -> dict[str, str]:
        token = create_identity_token(
            email=email,
            uid=uid or f"uid-{email}",
            secret=settings.auth_jwt_secret,
            algorithm=settings.auth_jwt_algorithm,
            name=email.split("@")[0],
        )
        return {"Authorization": f"Bearer {token}"}

    return _headers


@pytest.fixture
def add_user(store: InMemoryContentStore) -> Callable[..., User]:
    """Seed a user document directly in the store."""

    def _add(email: str, role: UserRole = UserRole.USER, **fields) -> User:
        user = create_user(email=email, uid=f"uid-{email}", name=email.split("@")[0])
        user.role = role
        for key, value in fields.items():
            setattr(user, key, value)
        store.users[email] = user
        return user

    return _add


@pytest.fixture
def admin(add_user: Callable[..., User]) -> User:
    return add_user("admin@forumx.dev", role=UserRole.ADMIN)
