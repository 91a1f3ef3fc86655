"""Errors raised by the application and realtime layers."""

from __future__ import annotations


class NotFoundError(LookupError):
    """Raised when a referenced user or request does not exist."""


class ConflictError(ValueError):
    """Raised when an action would duplicate existing state."""


class DirectMessageValidationError(ValueError):
    """Raised when a send request is rejected before persistence."""

    def __init__(self, code: str, detail: str) -> None:
        super().__init__(detail)
        self.code = code
        self.detail = detail


class PersistenceError(RuntimeError):
    """Raised by store adapters when the database rejects or fails a write."""


__all__ = [
    "ConflictError",
    "DirectMessageValidationError",
    "NotFoundError",
    "PersistenceError",
]
