"""Realtime presence, direct message and notification delivery."""

from .auth import TokenAuthenticator
from .channels import ChannelRouter
from .hub import RealtimeHub
from .messaging import DirectMessagePipeline
from .notifications import NotificationFanout
from .presence import PresenceBroadcaster
from .registry import Connection, ConnectionRegistry
from .session import RealtimeSession, SessionState

__all__ = [
    "ChannelRouter",
    "Connection",
    "ConnectionRegistry",
    "DirectMessagePipeline",
    "NotificationFanout",
    "PresenceBroadcaster",
    "RealtimeHub",
    "RealtimeSession",
    "SessionState",
    "TokenAuthenticator",
]
