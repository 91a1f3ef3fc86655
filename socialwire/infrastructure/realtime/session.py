"""State machine driving a single realtime client session."""

from __future__ import annotations

import logging
from enum import Enum
from typing import TYPE_CHECKING, Any

from .payloads import ERROR_EVENT, PONG_EVENT
from .registry import Connection, Transport

if TYPE_CHECKING:
    from .hub import RealtimeHub

logger = logging.getLogger(__name__)

SEND_DIRECT_MESSAGE = "sendDirectMessage"
PING = "ping"


class SessionState(str, Enum):
    CONNECTING = "connecting"
    REFUSED = "refused"
    OPEN = "open"
    CLOSED = "closed"


class RealtimeSession:
    """One client session, independent of the network transport.

    ``connecting -> open -> closed`` for authenticated clients and
    ``connecting -> refused`` otherwise. Each transition is a method, so
    tests drive sessions directly with fake transports.
    """

    def __init__(self, hub: "RealtimeHub", transport: Transport) -> None:
        self._hub = hub
        self._transport = transport
        self.state = SessionState.CONNECTING
        self.connection: Connection | None = None

    @property
    def user_id(self) -> int | None:
        return self.connection.user_id if self.connection else None

    def authenticate(self, token: str | None) -> bool:
        """Bind the session to the token's user, or refuse it."""

        self._require(SessionState.CONNECTING)
        user_id = self._hub.authenticator.verify(token)
        if user_id is None:
            self.state = SessionState.REFUSED
            return False
        self.connection = Connection(user_id=user_id, transport=self._transport)
        return True

    async def open(self) -> None:
        """Register the authenticated connection and announce presence."""

        self._require(SessionState.CONNECTING)
        if self.connection is None:
            raise RuntimeError("Session must be authenticated before it is opened")
        self.state = SessionState.OPEN
        await self._hub.presence.connect(self.connection)

    async def handle(self, message: Any) -> None:
        """Dispatch one client event."""

        self._require(SessionState.OPEN)

        if not isinstance(message, dict) or not isinstance(message.get("type"), str):
            await self.reject("invalid_message", "Events must be objects with a type")
            return

        event = message["type"]
        data = message.get("data")
        if data is None:
            data = {key: value for key, value in message.items() if key != "type"}

        if event in (SEND_DIRECT_MESSAGE, "dm"):
            await self._hub.messages.send(self.connection, data)
        elif event == PING:
            await self._hub.router.send(self.connection, PONG_EVENT, None)
        else:
            await self.reject("unknown_event", f"Unsupported event: {event}")

    async def reject(self, code: str, detail: str) -> None:
        if self.connection is None:
            return
        await self._hub.router.send(self.connection, ERROR_EVENT, {"code": code, "detail": detail})

    async def close(self) -> None:
        """Unregister the connection. Safe to call more than once."""

        previous, self.state = self.state, SessionState.CLOSED
        if previous is SessionState.OPEN and self.connection is not None:
            await self._hub.presence.disconnect(self.connection)

    def _require(self, expected: SessionState) -> None:
        if self.state is not expected:
            raise RuntimeError(
                f"Session is {self.state.value}; expected {expected.value}"
            )


__all__ = ["RealtimeSession", "SessionState"]
