"""
Abstract base class for storage backends.

A backend is a flat async key/blob store. Keys are '/'-separated relative
paths such as ``tasks.json``; values are opaque bytes. Encoding and
compression are the caller's business.
"""

from abc import ABC, abstractmethod


class StorageError(Exception):
    """Base exception for storage errors."""


class StorageKeyError(StorageError, KeyError):
    """Raised when a storage key doesn't exist."""


class StoragePermissionError(StorageError):
    """Raised for unsafe keys or when the OS refuses the operation."""


class StorageBackend(ABC):
    def __init__(self, **config):
        self.config = config

    @abstractmethod
    async def save(self, key: str, data: bytes) -> None:
        """Store *data* under *key*, replacing any previous value."""

    @abstractmethod
    async def load(self, key: str) -> bytes:
        """Raises StorageKeyError if *key* is missing."""

    async def load_if_exists(self, key: str) -> bytes | None:
        """Like :meth:`load` but returns None for a missing key."""
        try:
            return await self.load(key)
        except StorageKeyError:
            return None
