"""Services package."""

from finance_tracker.services.storage import (
    DEFAULT_STORAGE_KEY,
    InMemoryStorage,
    JsonFileStorage,
    KeyValueStorageInterface,
    NotFoundError,
    StorageError,
    TransactionStorage,
)

__all__ = [
    "DEFAULT_STORAGE_KEY",
    "InMemoryStorage",
    "JsonFileStorage",
    "KeyValueStorageInterface",
    "NotFoundError",
    "StorageError",
    "TransactionStorage",
]
