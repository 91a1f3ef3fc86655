"""In-memory collaborators for exercising the realtime core without a database."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any

import anyio
import pytest

from socialwire.application.errors import PersistenceError
from socialwire.domain.entities import DirectMessage, Notification, NotificationKind
from socialwire.infrastructure.realtime import Connection, RealtimeHub

FIXED_TIME = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


class FakeTransport:
    """Record every event pushed to a client."""

    def __init__(self) -> None:
        self.sent: list[dict[str, Any]] = []
        self.fail = False

    async def send_json(self, data: Any) -> None:
        if self.fail:
            raise RuntimeError("socket is closed")
        self.sent.append(data)

    def events(self, event_type: str | None = None) -> list[dict[str, Any]]:
        return [item for item in self.sent if event_type is None or item["type"] == event_type]

    def payloads(self, event_type: str) -> list[Any]:
        return [item["data"] for item in self.events(event_type)]


class MemoryMessageStore:
    def __init__(self) -> None:
        self.rows: list[DirectMessage] = []
        self.fail = False

    async def insert(self, sender_id: int, recipient_id: int, content: str) -> DirectMessage:
        if self.fail:
            raise PersistenceError("Could not store direct message")
        message = DirectMessage(
            id=len(self.rows) + 1,
            sender_id=sender_id,
            recipient_id=recipient_id,
            content=content,
            created_at=FIXED_TIME,
        )
        self.rows.append(message)
        return message


class MemoryNotificationStore:
    def __init__(self) -> None:
        self.rows: list[Notification] = []
        self.fail = False

    async def insert(
        self, target_id: int, kind: NotificationKind, reference: dict[str, Any]
    ) -> Notification:
        if self.fail:
            raise PersistenceError("Could not store notification")
        notification = Notification(
            id=len(self.rows) + 1,
            user_id=target_id,
            kind=kind,
            reference=reference,
            created_at=FIXED_TIME,
        )
        self.rows.append(notification)
        return notification


class FakeDirectory:
    """Friend relation held in memory.

    Setting ``gate`` to an ``anyio.Event`` blocks every friend lookup until the
    event is set, which lets tests interleave connects and disconnects.
    """

    def __init__(self) -> None:
        self.friends: dict[int, set[int]] = {}
        self.last_seen: dict[int, datetime] = {}
        self.gate: anyio.Event | None = None
        self.fail = False

    def befriend(self, user_id: int, other_id: int) -> None:
        self.friends.setdefault(user_id, set()).add(other_id)
        self.friends.setdefault(other_id, set()).add(user_id)

    async def friend_ids(self, user_id: int) -> set[int]:
        if self.gate is not None:
            await self.gate.wait()
        if self.fail:
            raise PersistenceError("Could not load friends")
        return set(self.friends.get(user_id, set()))

    async def touch_last_seen(self, user_id: int, seen_at: datetime) -> None:
        if self.fail:
            raise PersistenceError("Could not record last_seen")
        self.last_seen[user_id] = seen_at


@pytest.fixture
def message_store() -> MemoryMessageStore:
    return MemoryMessageStore()


@pytest.fixture
def notification_store() -> MemoryNotificationStore:
    return MemoryNotificationStore()


@pytest.fixture
def directory() -> FakeDirectory:
    return FakeDirectory()


@pytest.fixture
def make_hub(message_store, notification_store, directory):
    def _make(**options: Any) -> RealtimeHub:
        return RealtimeHub(
            message_store=message_store,
            notification_store=notification_store,
            directory=directory,
            **options,
        )

    return _make


@pytest.fixture
def hub(make_hub) -> RealtimeHub:
    return make_hub()


@pytest.fixture
def make_transport():
    return FakeTransport


@pytest.fixture
def connect(hub):
    """Open a connection for ``user_id`` on the default hub and return it."""

    async def _connect(user_id: int) -> Connection:
        connection = Connection(user_id=user_id, transport=FakeTransport())
        await hub.presence.connect(connection)
        return connection

    return _connect
