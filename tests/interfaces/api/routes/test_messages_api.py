"""Tests for direct message history, unread counts and read flags."""

from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from socialwire.config import get_settings
from socialwire.infrastructure.database import SessionLocal
from socialwire.infrastructure.models import DirectMessageModel

BASE_TIME = datetime(2024, 3, 1, 9, 0)


@pytest.fixture
def add_message():
    def _add(sender_id: int, recipient_id: int, content: str, minute: int, *, read: bool = False) -> None:
        with SessionLocal() as session:
            session.add(
                DirectMessageModel(
                    sender_id=sender_id,
                    recipient_id=recipient_id,
                    content=content,
                    created_at=BASE_TIME + timedelta(minutes=minute),
                    read=read,
                )
            )
            session.commit()

    return _add


def test_history_returns_the_latest_messages_oldest_first(
    client, create_user, auth_headers, add_message, monkeypatch: pytest.MonkeyPatch
) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")
    carol = create_user("Carol")
    for minute in range(5):
        sender, recipient = (alice, bob) if minute % 2 == 0 else (bob, alice)
        add_message(sender, recipient, f"m{minute}", minute)
    add_message(carol, alice, "elsewhere", 10)
    monkeypatch.setattr(get_settings(), "message_history_limit", 3)

    response = client.get(f"/messages/{bob}", headers=auth_headers(alice))

    assert response.status_code == 200
    payload = response.json()
    assert [message["content"] for message in payload] == ["m2", "m3", "m4"]
    assert payload[0]["sender_id"] == alice
    assert payload[1]["recipient_id"] == alice


def test_unread_counts_and_mark_read(client, create_user, auth_headers, add_message) -> None:
    alice = create_user("Alice")
    bob = create_user("Bob")
    carol = create_user("Carol")
    add_message(bob, alice, "one", 0)
    add_message(bob, alice, "two", 1)
    add_message(carol, alice, "three", 2)
    add_message(carol, alice, "seen", 3, read=True)
    add_message(alice, bob, "outgoing", 4)

    counts = client.get("/messages/unread-counts", headers=auth_headers(alice))
    assert counts.json() == {"counts": {str(bob): 2, str(carol): 1}}

    marked = client.post(f"/messages/{bob}/read", headers=auth_headers(alice))
    assert marked.json() == {"updated": 2}

    counts = client.get("/messages/unread-counts", headers=auth_headers(alice))
    assert counts.json() == {"counts": {str(carol): 1}}
    assert client.get("/messages/unread-counts", headers=auth_headers(bob)).json() == {
        "counts": {str(alice): 1}
    }


def test_history_requires_authentication(client, create_user) -> None:
    bob = create_user("Bob")

    response = client.get(f"/messages/{bob}")

    assert response.status_code == 401
