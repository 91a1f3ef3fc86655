"""Composition root of the realtime layer."""

from __future__ import annotations

from typing import Any, Mapping

from socialwire.config import Settings
from socialwire.domain.entities import Notification, NotificationKind

from .auth import TokenAuthenticator
from .channels import ChannelRouter
from .messaging import DirectMessagePipeline, MessageStore
from .notifications import NotificationFanout, NotificationStore
from .presence import PresenceBroadcaster, PresenceDirectory, PresenceScope
from .registry import ConnectionRegistry, Transport
from .session import RealtimeSession
from .stores import SessionFactory, SqlMessageStore, SqlNotificationStore, SqlUserDirectory


class RealtimeHub:
    """Own the connection registry and every component sharing it.

    One hub exists per application (created by ``create_app``);
    tests build as many isolated hubs as they need.
    """

    def __init__(
        self,
        *,
        message_store: MessageStore,
        notification_store: NotificationStore,
        directory: PresenceDirectory,
        authenticator: TokenAuthenticator | None = None,
        presence_scope: PresenceScope = "friends",
        message_max_length: int = 2000,
    ) -> None:
        self.authenticator = authenticator or TokenAuthenticator()
        self.registry = ConnectionRegistry()
        self.router = ChannelRouter(self.registry)
        self.presence = PresenceBroadcaster(
            self.router, self.registry, directory, scope=presence_scope
        )
        self.messages = DirectMessagePipeline(
            self.router, message_store, max_length=message_max_length
        )
        self.notifications = NotificationFanout(self.router, notification_store)

    @classmethod
    def from_settings(cls, settings: Settings, session_factory: SessionFactory) -> "RealtimeHub":
        return cls(
            message_store=SqlMessageStore(session_factory),
            notification_store=SqlNotificationStore(session_factory),
            directory=SqlUserDirectory(session_factory),
            presence_scope=settings.presence_scope,
            message_max_length=settings.message_max_length,
        )

    def open_session(self, transport: Transport) -> RealtimeSession:
        return RealtimeSession(self, transport)

    def is_online(self, user_id: int) -> bool:
        return self.registry.is_online(user_id)

    async def introduce_friends(self, user_id: int, other_id: int) -> None:
        await self.presence.introduce(user_id, other_id)

    async def notify(
        self,
        target_id: int,
        kind: NotificationKind | str,
        reference: Mapping[str, Any] | None = None,
    ) -> Notification | None:
        return await self.notifications.notify(target_id, kind, reference)


__all__ = ["RealtimeHub"]
