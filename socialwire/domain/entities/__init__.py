"""Domain entities exposed by the application."""

from .direct_message import DirectMessage
from .friend_request import FriendRequest
from .notification import Notification, NotificationKind
from .user import User, UserSummary

__all__ = [
    "DirectMessage",
    "FriendRequest",
    "Notification",
    "NotificationKind",
    "User",
    "UserSummary",
]
