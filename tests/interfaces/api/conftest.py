"""Fixtures for exercising the API against a temporary SQLite database."""

from __future__ import annotations

from collections.abc import Iterator
from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from socialwire.infrastructure.database import (
    Base,
    SessionLocal,
    engine,
    initialize_database,
)
from socialwire.infrastructure.models import UserModel
from socialwire.infrastructure.repositories import FriendshipRepository
from socialwire.infrastructure.security import create_user_token, get_password_hash
from socialwire.main import create_app

# Hashing is slow; every test user shares this password and its hash.
PASSWORD = "StrongPass123"
PASSWORD_HASH = get_password_hash(PASSWORD)


@pytest.fixture(autouse=True)
def reset_database() -> Iterator[None]:
    """Ensure the test database starts from a clean state for each test."""

    Base.metadata.drop_all(bind=engine)
    initialize_database()
    yield
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture
def client() -> Iterator[TestClient]:
    # The context manager keeps every websocket on one event loop.
    with TestClient(create_app()) as test_client:
        yield test_client


@pytest.fixture
def create_user():
    def _create(
        first_name: str = "Ana",
        *,
        last_name: str = "Tester",
        email: str | None = None,
        is_active: bool = True,
    ) -> int:
        with SessionLocal() as session:
            user = UserModel(
                first_name=first_name,
                last_name=last_name,
                email=email or f"{first_name.lower()}@example.com",
                password=PASSWORD_HASH,
                is_active=is_active,
                created_at=datetime(2024, 1, 1),
            )
            session.add(user)
            session.commit()
            session.refresh(user)
            return user.id

    return _create


@pytest.fixture
def befriend():
    def _befriend(user_id: int, other_id: int) -> None:
        with SessionLocal() as session:
            FriendshipRepository(session).add_friendship(user_id, other_id)

    return _befriend


@pytest.fixture
def auth_headers():
    def _headers(user_id: int) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_user_token(user_id)}"}

    return _headers


@pytest.fixture
def ws_url():
    def _url(user_id: int) -> str:
        return f"/ws?token={create_user_token(user_id)}"

    return _url
