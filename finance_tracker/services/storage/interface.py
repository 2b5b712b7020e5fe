"""
Abstract Storage Interface

DESIGN DECISION: Storage is modelled as a tiny key-value store holding
string blobs, the same contract a browser's local storage offers.
This allows us to:
1. Keep the transaction list as one serialized value under one key
2. Use in-memory storage for testing
3. Swap the on-disk layout without touching the store

The interface is intentionally minimal - no partial writes, no listing,
no migrations.
"""

from abc import ABC, abstractmethod
from typing import Optional


class KeyValueStorageInterface(ABC):
    """
    Abstract interface for key-value blob storage.

    Any storage backend (JSON files, in-memory dict, ...) must implement
    these methods.
    """

    @abstractmethod
    def get_item(self, key: str) -> Optional[str]:
        """
        Read the value stored under `key`.

        Args:
            key: Storage entry name

        Returns:
            The stored string, or None if nothing is stored under `key`

        Raises:
            StorageError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set_item(self, key: str, value: str) -> None:
        """
        Replace the value stored under `key`.

        The write is all-or-nothing: readers never see a partial value.

        Raises:
            StorageError: If the write fails
        """
        pass


class StorageError(Exception):
    """Base exception for storage operations."""
    pass


class NotFoundError(StorageError):
    """Entity not found in storage."""
    pass
