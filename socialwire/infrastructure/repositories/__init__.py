"""Repository implementations for infrastructure layer."""

from .direct_message_repository import DirectMessageRepository
from .friendship_repository import FriendshipRepository
from .notification_repository import NotificationRepository
from .user_repository import UserRepository

__all__ = [
    "DirectMessageRepository",
    "FriendshipRepository",
    "NotificationRepository",
    "UserRepository",
]
