"""Use cases for reading notifications."""

from .inbox import list_notifications, mark_notifications_read

__all__ = ["list_notifications", "mark_notifications_read"]
