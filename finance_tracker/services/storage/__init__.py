"""
Storage Services Package

Provides the abstract key-value interface, concrete backends, and the
adapter that stores the transaction list under a single key.
"""

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    NotFoundError,
    StorageError,
)
from finance_tracker.services.storage.json_file import JsonFileStorage
from finance_tracker.services.storage.memory import InMemoryStorage
from finance_tracker.services.storage.adapter import (
    DEFAULT_STORAGE_KEY,
    TransactionStorage,
)

__all__ = [
    # Interfaces
    "KeyValueStorageInterface",
    # Exceptions
    "NotFoundError",
    "StorageError",
    # Backends
    "InMemoryStorage",
    "JsonFileStorage",
    # Adapter
    "DEFAULT_STORAGE_KEY",
    "TransactionStorage",
]
