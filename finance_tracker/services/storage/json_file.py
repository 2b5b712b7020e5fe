"""
JSON File Storage Implementation

DESIGN DECISION: Each storage key maps to one file, `<data_dir>/<key>.json`.
This mirrors the browser local-storage contract closely:
1. One key, one value, fully overwritten on every write
2. No server, nothing shared beyond the local user profile
3. Users can open (or delete) their data with any text editor

Writes go to a temp file in the same directory and are moved into
place with os.replace, so a crash mid-write leaves the old value intact.
"""

import os
import tempfile
from pathlib import Path
from typing import Optional, Union

from finance_tracker.services.storage.interface import (
    KeyValueStorageInterface,
    StorageError,
)


class JsonFileStorage(KeyValueStorageInterface):
    """
    File-per-key storage under a data directory.

    The directory is created on first write.
    """

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def path_for(self, key: str) -> Path:
        """File holding the value for `key`."""
        return self._data_dir / f"{key}.json"

    def get_item(self, key: str) -> Optional[str]:
        """Read the stored value, or None if the file does not exist."""
        path = self.path_for(key)
        try:
            return path.read_text(encoding="utf-8")
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Failed to read {path}: {e}")

    def set_item(self, key: str, value: str) -> None:
        """Atomically replace the stored value."""
        path = self.path_for(key)
        try:
            self._data_dir.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(prefix=".tmp", dir=self._data_dir)
        except OSError as e:
            raise StorageError(f"Failed to prepare {path}: {e}")

        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp, path)
        except OSError as e:
            try:
                os.remove(tmp)
            except OSError:
                pass
            raise StorageError(f"Failed to write {path}: {e}")
