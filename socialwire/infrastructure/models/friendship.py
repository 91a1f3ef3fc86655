"""SQLAlchemy models for friendships and pending friend requests."""

from sqlalchemy import Column, DateTime, ForeignKey, Integer, UniqueConstraint
from sqlalchemy.orm import relationship

from socialwire.infrastructure.database import Base
from socialwire.utils import now_in_app_naive_datetime


class FriendshipModel(Base):
    """One direction of a friendship; accepted friendships are stored twice."""

    __tablename__ = "friendship"
    __table_args__ = (UniqueConstraint("user_id", "friend_id", name="uq_friendship_pair"),)

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True)
    friend_id = Column(Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False)
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    friend = relationship("UserModel", foreign_keys=[friend_id], lazy="joined")


class FriendRequestModel(Base):
    """A friend request that has not been accepted or rejected yet."""

    __tablename__ = "friend_request"
    __table_args__ = (
        UniqueConstraint("from_user_id", "to_user_id", name="uq_friend_request_pair"),
    )

    id = Column(Integer, primary_key=True, index=True)
    from_user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False
    )
    to_user_id = Column(
        Integer, ForeignKey("user.id", ondelete="CASCADE"), nullable=False, index=True
    )
    created_at = Column(DateTime, nullable=False, default=now_in_app_naive_datetime)

    sender = relationship("UserModel", foreign_keys=[from_user_id], lazy="joined")


__all__ = ["FriendRequestModel", "FriendshipModel"]
