"""Use cases for the friend relation."""

from .accept_friend_request import accept_friend_request
from .list_friends import list_friend_presence, list_friend_requests, list_friends
from .reject_friend_request import reject_friend_request
from .remove_friend import remove_friend
from .send_friend_request import send_friend_request

__all__ = [
    "accept_friend_request",
    "list_friend_presence",
    "list_friend_requests",
    "list_friends",
    "reject_friend_request",
    "remove_friend",
    "send_friend_request",
]
