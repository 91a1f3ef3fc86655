"""Realtime presence, direct messaging and notification service."""

__version__ = "0.1.0"
