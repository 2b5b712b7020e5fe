"""In-memory storage backend, for tests and for running without a data directory."""

from typing import Optional

from finance_tracker.services.storage.interface import KeyValueStorageInterface


class InMemoryStorage(KeyValueStorageInterface):
    """
    Dict-backed key-value storage.

    `write_count` counts set_item calls so callers can check that a
    rejected mutation never reached storage.
    """

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._items: dict[str, str] = dict(initial or {})
        self.write_count = 0

    def get_item(self, key: str) -> Optional[str]:
        return self._items.get(key)

    def set_item(self, key: str, value: str) -> None:
        self.write_count += 1
        self._items[key] = value
