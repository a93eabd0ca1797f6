"""Domain error taxonomy.

Every repository implementation, in-memory or persisted, raises these and
nothing else for lookup and uniqueness failures.  Engine-native errors
(SQLAlchemy, asyncpg) are translated at the persistence boundary.

The offending key is kept on the exception as well as in the message so
callers can react to it without parsing strings.
"""

from __future__ import annotations

from typing import Any


class AppError(Exception):
    """Base class for errors the application layer is expected to handle."""

    def __init__(self, message: str, key: Any = None) -> None:
        super().__init__(message)
        self.message = message
        self.key = key


class NotFoundError(AppError):
    """An identifier or unique-key lookup matched nothing."""


class ConflictError(AppError):
    """A uniqueness guard rejected a write on a business key."""


class StorageUnavailableError(AppError):
    """The backing store could not be reached (persisted adapter only)."""


__all__ = [
    "AppError",
    "NotFoundError",
    "ConflictError",
    "StorageUnavailableError",
]
