"""Use cases for reading direct message history."""

from .conversation import list_conversation, mark_conversation_read, unread_counts

__all__ = ["list_conversation", "mark_conversation_read", "unread_counts"]
