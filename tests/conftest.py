from __future__ import annotations

import os
import sys
from collections.abc import Iterator
from pathlib import Path

# Settings are read at import time; pin the environment before app imports.
os.environ["APP_ENV"] = "test"
os.environ.pop("DATABASE_URL", None)

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy import create_engine  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import app.db.tables  # noqa: E402, F401
from app.api.dependencies import product_repo, user_repo  # noqa: E402
from app.db.engine import Base, build_session_factory  # noqa: E402
from app.main import app  # noqa: E402
from app.models.user import ROLE_ADMIN, ROLE_USER, User  # noqa: E402
from app.services import auth_service, token_service  # noqa: E402


@pytest.fixture(autouse=True)
def reset_repos() -> None:
    """Empty the in-memory repositories between tests."""
    product_repo.clear()
    user_repo.clear()


@pytest.fixture
def client() -> TestClient:
    return TestClient(app)


def mint_token(
    user_id: str = "1",
    roles: list[str] | None = None,
    email: str = "someone@example.com",
) -> str:
    """A valid ES256 access token for tests."""
    return token_service.create_access_token(sub=user_id, email=email, roles=roles)


@pytest.fixture
def token() -> str:
    return mint_token(roles=[ROLE_USER])


@pytest.fixture
def admin_token() -> str:
    return mint_token(user_id="999", roles=[ROLE_ADMIN, ROLE_USER], email="admin@example.com")


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {admin_token}"}


def seed_user(
    email: str = "jane@example.com",
    password: str = "secret-pass",
    name: str = "Jane",
    roles: list[str] | None = None,
    enabled: bool = True,
) -> User:
    """Save a user with a real argon2 hash into the in-memory repo."""
    user = User(email, name, roles)
    user.password = auth_service.hash_password(password)
    user.enabled = enabled
    user_repo.save(user)
    return user


class FakeHasher:
    """PasswordHasher double: readable, deterministic hashes."""

    def __init__(self) -> None:
        self.calls: list[str] = []

    def hash(self, plain_password: str) -> str:
        self.calls.append(plain_password)
        return f"hashed:{plain_password}"


@pytest.fixture
def hasher() -> FakeHasher:
    return FakeHasher()


@pytest.fixture
def db_session() -> Iterator[Session]:
    """Session bound to a fresh in-memory SQLite database."""
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(engine)
    factory = build_session_factory(engine)
    with factory() as session:
        yield session
    engine.dispose()
