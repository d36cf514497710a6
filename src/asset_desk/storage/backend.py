"""
Key-value storage backends.

Defines the interface every backend implements and two implementations:
an in-memory dict for tests and ephemeral runs, and a file-per-key store
for durable local data. Values are opaque strings; whole-value replace only.
"""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Optional


logger = logging.getLogger(__name__)


class PersistenceError(Exception):
    """Raised when the durable store cannot be read or written."""
    pass


class KeyValueStore(ABC):
    """
    Abstract base class for key-value storage backends.

    A missing key is not an error: get returns None and remove is a no-op.
    Implementations raise PersistenceError for I/O failures.
    """

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        """
        Read the value stored under key.

        Args:
            key: Slot name

        Returns:
            Stored string, or None when the key is absent

        Raises:
            PersistenceError: If the backend cannot be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """
        Replace the value stored under key.

        Raises:
            PersistenceError: If the value cannot be written
        """
        pass

    @abstractmethod
    def remove(self, key: str) -> None:
        """
        Delete key if present.

        Raises:
            PersistenceError: If the key exists but cannot be removed
        """
        pass


class MemoryStore(KeyValueStore):
    """Dict-backed store. Nothing survives the process."""

    def __init__(self, initial: Optional[dict[str, str]] = None):
        self._data: dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return list(self._data)


class FileStore(KeyValueStore):
    """
    File-based store with one JSON document per key.

    Writes go to a temporary file in the same directory and are moved into
    place with os.replace, so a reader never sees a half-written value.
    """

    def __init__(self, directory: str | Path):
        """
        Initialize the file store.

        Args:
            directory: Directory to hold the key files (created if missing)
        """
        self.directory = Path(directory)
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot create storage directory {self.directory}: {e}")

    def _path_for(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path_for(key)
        if not path.exists():
            return None
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise PersistenceError(f"Cannot read {path}: {e}")

    def set(self, key: str, value: str) -> None:
        path = self._path_for(key)
        tmp_name = None
        try:
            fd, tmp_name = tempfile.mkstemp(
                prefix=f".{key}.", suffix=".tmp", dir=self.directory
            )
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                f.write(value)
            os.replace(tmp_name, path)
        except OSError as e:
            if tmp_name and os.path.exists(tmp_name):
                os.unlink(tmp_name)
            raise PersistenceError(f"Cannot write {path}: {e}")
        logger.debug("Wrote %d bytes to %s", len(value), path)

    def remove(self, key: str) -> None:
        path = self._path_for(key)
        try:
            path.unlink(missing_ok=True)
        except OSError as e:
            raise PersistenceError(f"Cannot remove {path}: {e}")
