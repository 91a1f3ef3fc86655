"""Online/offline announcements for realtime users."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import AsyncIterator, Callable, Iterable
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Literal, Protocol

from socialwire.application.errors import PersistenceError
from socialwire.utils import now_in_app_timezone

from .channels import ChannelRouter
from .payloads import PRESENCE_EVENT, PRESENCE_SNAPSHOT_EVENT, presence_payload
from .registry import Connection, ConnectionRegistry

logger = logging.getLogger(__name__)

PresenceScope = Literal["friends", "global"]


class PresenceDirectory(Protocol):
    """Read the friend relation and record when users were last connected."""

    async def friend_ids(self, user_id: int) -> Iterable[int]: ...

    async def touch_last_seen(self, user_id: int, seen_at: datetime) -> None: ...


class PresenceBroadcaster:
    """Announce aggregate presence transitions of each user.

    Only the first connection of a user and the removal of its last one are
    transitions; the decision is taken in the same synchronous step as the
    registry mutation. Announcements for one user are then emitted one at a
    time in decision order, so listeners always see online and offline
    alternate even when a reconnect overlaps a slow database call.

    ``scope="friends"`` targets the user's friends and ``scope="global"``
    every other online user. Either way the relation is symmetric: a newly
    connected client receives a ``presence:snapshot`` of the same audience
    it announces itself to.
    """

    def __init__(
        self,
        router: ChannelRouter,
        registry: ConnectionRegistry,
        directory: PresenceDirectory,
        *,
        scope: PresenceScope = "friends",
        clock: Callable[[], datetime] = now_in_app_timezone,
    ) -> None:
        if scope not in ("friends", "global"):
            raise ValueError(f"Unsupported presence scope: {scope!r}")
        self._router = router
        self._registry = registry
        self._directory = directory
        self._scope = scope
        self._clock = clock
        self._locks: dict[int, asyncio.Lock] = {}
        self._waiting: dict[int, int] = {}

    @property
    def scope(self) -> PresenceScope:
        return self._scope

    async def connect(self, connection: Connection) -> bool:
        """Join ``connection`` and announce the user if it just came online."""

        user_id = connection.user_id
        went_online = self._router.join_channel(connection)
        logger.debug("%r joined (first connection: %s)", connection, went_online)

        audience: set[int] | None = None
        if went_online:
            async with self._serialized(user_id):
                audience = await self._audience(user_id)
                await self._announce(user_id, True, audience)

        if audience is None:
            audience = await self._audience(user_id)
        # Friends who connected meanwhile already announced themselves to this user.
        online = sorted(uid for uid in audience if self._registry.is_online(uid))
        await self._router.send(connection, PRESENCE_SNAPSHOT_EVENT, {"online": online})
        return went_online

    async def disconnect(self, connection: Connection) -> bool:
        """Remove ``connection`` and announce the user if it was the last one."""

        user_id = connection.user_id
        went_offline = self._router.leave_channel(connection)
        logger.debug("%r left (last connection: %s)", connection, went_offline)
        if not went_offline:
            return False

        seen_at = self._clock()
        async with self._serialized(user_id):
            try:
                await self._directory.touch_last_seen(user_id, seen_at)
            except PersistenceError:
                logger.exception("Could not record last_seen for user %s", user_id)
            audience = await self._audience(user_id)
            await self._announce(user_id, False, audience, last_seen=seen_at)
        return True

    async def introduce(self, user_id: int, other_id: int) -> None:
        """Show two users who just became friends each other's presence.

        Audiences are read at connect time, so friends made while both are
        connected would otherwise only ever hear about the next disconnect.
        """

        if self._scope != "friends" or user_id == other_id:
            return
        for subject, audience in ((user_id, other_id), (other_id, user_id)):
            async with self._serialized(subject):
                if self._registry.is_online(subject) and self._registry.is_online(audience):
                    await self._announce(subject, True, (audience,))

    def is_online(self, user_id: int) -> bool:
        return self._registry.is_online(user_id)

    async def _audience(self, user_id: int) -> set[int]:
        if self._scope == "global":
            return self._registry.online_user_ids() - {user_id}

        try:
            friend_ids = await self._directory.friend_ids(user_id)
        except PersistenceError:
            logger.exception("Could not load friends of user %s for presence", user_id)
            return set()
        return {int(friend_id) for friend_id in friend_ids if friend_id != user_id}

    async def _announce(
        self,
        user_id: int,
        is_online: bool,
        audience: Iterable[int],
        *,
        last_seen: datetime | None = None,
    ) -> None:
        payload = presence_payload(user_id, is_online, last_seen=last_seen)
        for target_id in sorted(audience):
            await self._router.publish(target_id, PRESENCE_EVENT, dict(payload))

    @asynccontextmanager
    async def _serialized(self, user_id: int) -> AsyncIterator[None]:
        # The waiter is queued before the first suspension, which keeps FIFO order.
        lock = self._locks.get(user_id)
        if lock is None:
            lock = self._locks[user_id] = asyncio.Lock()
        self._waiting[user_id] = self._waiting.get(user_id, 0) + 1
        try:
            async with lock:
                yield
        finally:
            remaining = self._waiting[user_id] - 1
            if remaining:
                self._waiting[user_id] = remaining
            else:
                del self._waiting[user_id]
                self._locks.pop(user_id, None)


__all__ = ["PresenceBroadcaster", "PresenceDirectory", "PresenceScope"]
