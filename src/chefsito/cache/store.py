"""
Chefsito - Local Key/Value Store.

Device-local persistent storage addressed by string keys. Values are
JSON-compatible (strings, numbers, bools). Used by the expiring cache
and by simple user settings.
"""

from __future__ import annotations

import json
import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any

from chefsito.errors import StorageError

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """Minimal key/value storage interface."""

    @abstractmethod
    def get(self, key: str) -> Any | None:
        """Return the stored value or None."""

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """Store a value, replacing any previous one."""

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""

    @abstractmethod
    def keys(self) -> set[str]:
        """All stored keys."""


class MemoryStore(KeyValueStore):
    """In-process store. Nothing survives a restart."""

    def __init__(self, initial: dict[str, Any] | None = None):
        self._data: dict[str, Any] = dict(initial or {})

    def get(self, key: str) -> Any | None:
        return self._data.get(key)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> set[str]:
        return set(self._data)


class JsonFileStore(KeyValueStore):
    """
    Store backed by a single JSON file.

    The whole map is loaded lazily on first access and rewritten on every
    mutation (write to a temp file, then rename). The in-memory map only
    changes once the rename succeeds.
    """

    def __init__(self, path: Path | str):
        self.path = Path(path)
        self._data: dict[str, Any] | None = None

    def _load(self) -> dict[str, Any]:
        if self._data is None:
            if not self.path.exists():
                self._data = {}
            else:
                try:
                    self._data = json.loads(self.path.read_text(encoding="utf-8"))
                except (OSError, ValueError) as e:
                    raise StorageError(f"Cannot read store {self.path}: {e}") from e
                if not isinstance(self._data, dict):
                    self._data = None
                    raise StorageError(f"Store {self.path} is not a JSON object")
        return self._data

    def _flush(self, data: dict[str, Any]) -> None:
        tmp = None
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp = tempfile.mkstemp(dir=self.path.parent, prefix=".store-", suffix=".json")
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp, self.path)
        except OSError as e:
            if tmp is not None and os.path.exists(tmp):
                os.unlink(tmp)
            raise StorageError(f"Cannot write store {self.path}: {e}") from e
        self._data = data

    def get(self, key: str) -> Any | None:
        return self._load().get(key)

    def set(self, key: str, value: Any) -> None:
        data = dict(self._load())
        data[key] = value
        self._flush(data)

    def remove(self, key: str) -> None:
        data = dict(self._load())
        if key in data:
            del data[key]
            self._flush(data)

    def keys(self) -> set[str]:
        return set(self._load())
