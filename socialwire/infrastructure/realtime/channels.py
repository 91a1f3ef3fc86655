"""Per-user channels layered over the connection registry."""

from __future__ import annotations

import logging
from typing import Any

from .registry import Connection, ConnectionRegistry

logger = logging.getLogger(__name__)


class ChannelRouter:
    """Deliver server events to every live connection of a user."""

    def __init__(self, registry: ConnectionRegistry) -> None:
        self._registry = registry

    def join_channel(self, connection: Connection) -> bool:
        """Join ``connection`` to its user's channel.

        Returns ``True`` when the user had no other live connection. Joining
        the same connection twice is a programming error.
        """

        if connection in self._registry:
            raise RuntimeError(f"{connection!r} already joined its channel")
        return self._registry.register(connection)

    def leave_channel(self, connection: Connection) -> bool:
        """Remove ``connection``. Returns ``True`` when the channel is now empty."""

        return self._registry.unregister(connection)

    async def publish(self, user_id: int, event: str, payload: Any) -> int:
        """Send ``event`` to every connection of ``user_id``.

        Nothing is queued for users without connections. Returns the number
        of connections that accepted the event.
        """

        targets = self._registry.connections_for(user_id)
        if not targets:
            return 0

        message = {"type": event, "data": payload}
        delivered = 0
        for connection in targets:
            if await self._deliver(connection, message):
                delivered += 1
        return delivered

    async def send(self, connection: Connection, event: str, payload: Any) -> bool:
        """Send ``event`` to a single connection only."""

        return await self._deliver(connection, {"type": event, "data": payload})

    @staticmethod
    async def _deliver(connection: Connection, message: dict[str, Any]) -> bool:
        try:
            await connection.transport.send_json(message)
        except Exception:
            # The connection's own receive loop notices the closed socket and unregisters it.
            logger.warning(
                "Dropping %s event for %r: transport rejected the send",
                message.get("type"),
                connection,
                exc_info=True,
            )
            return False
        return True


__all__ = ["ChannelRouter"]
