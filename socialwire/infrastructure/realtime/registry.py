"""Live connection bookkeeping for the realtime gateway."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Protocol
from uuid import uuid4


class Transport(Protocol):
    """Anything able to push a JSON document to one client."""

    async def send_json(self, data: Any) -> None: ...


@dataclass(eq=False)
class Connection:
    """One authenticated bidirectional session. ``user_id`` never changes."""

    user_id: int
    transport: Transport
    id: str = field(default_factory=lambda: uuid4().hex)

    def __repr__(self) -> str:
        return f"Connection(id={self.id!r}, user_id={self.user_id!r})"


class ConnectionRegistry:
    """Map user identities to the set of their live connections.

    Every method is synchronous. On a single event loop that makes each call
    atomic with respect to other connection handlers; callers that await
    between a query and a decision must query again after resuming.
    """

    def __init__(self) -> None:
        self._by_user: dict[int, dict[str, Connection]] = {}
        self._owners: dict[str, int] = {}

    def register(self, connection: Connection) -> bool:
        """Add ``connection``. Returns ``True`` when it is the user's first one."""

        if connection.id in self._owners:
            raise RuntimeError(f"{connection!r} is already registered")

        handles = self._by_user.setdefault(connection.user_id, {})
        first = not handles
        handles[connection.id] = connection
        self._owners[connection.id] = connection.user_id
        return first

    def unregister(self, connection: Connection) -> bool:
        """Remove ``connection``. Returns ``True`` when the user has none left."""

        user_id = self._owners.pop(connection.id, None)
        if user_id is None:
            return False

        handles = self._by_user.get(user_id)
        if handles is None:
            return False
        handles.pop(connection.id, None)
        if handles:
            return False
        del self._by_user[user_id]
        return True

    def is_online(self, user_id: int) -> bool:
        return bool(self._by_user.get(user_id))

    def connections_for(self, user_id: int) -> list[Connection]:
        """Return a snapshot of the live connections of ``user_id``."""

        return list(self._by_user.get(user_id, {}).values())

    def online_user_ids(self) -> set[int]:
        return set(self._by_user)

    def __contains__(self, connection: object) -> bool:
        return isinstance(connection, Connection) and connection.id in self._owners

    def __len__(self) -> int:
        return len(self._owners)


__all__ = ["Connection", "ConnectionRegistry", "Transport"]
