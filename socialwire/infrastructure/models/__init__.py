"""ORM models used by the application infrastructure."""

from .direct_message import DirectMessageModel
from .friendship import FriendRequestModel, FriendshipModel
from .notification import NotificationModel
from .user import UserModel

__all__ = [
    "DirectMessageModel",
    "FriendRequestModel",
    "FriendshipModel",
    "NotificationModel",
    "UserModel",
]
