from .auth import SignupRequest, SignupResponse, Token
from .friends import FriendPresenceRead, FriendRequestRead
from .messages import DirectMessageRead, UnreadCountsRead
from .notification import NotificationMarkReadRequest, NotificationRead
from .user import MessageResponse, UserProfileRead, UserRead, UserSummaryRead

__all__ = [
    "DirectMessageRead",
    "FriendPresenceRead",
    "FriendRequestRead",
    "MessageResponse",
    "NotificationMarkReadRequest",
    "NotificationRead",
    "SignupRequest",
    "SignupResponse",
    "Token",
    "UnreadCountsRead",
    "UserProfileRead",
    "UserRead",
    "UserSummaryRead",
]
