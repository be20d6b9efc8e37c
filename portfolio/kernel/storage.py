"""
Portfolio Kernel — Key-Value Storage

Synchronous string key → string value storage used by the persistence layer.
Two roles: durable storage (preferences, survives restarts) and session
storage (derived-view cache, lives as long as the process).

Every backend may raise on any call. Callers wrap reads and writes; see
portfolio.kernel.persistence.
"""

from __future__ import annotations

import json
import os
from pathlib import Path

# ---------------------------------------------------------------------------
# Storage protocol
# ---------------------------------------------------------------------------


class KeyValueStorage:
    """
    Abstract storage interface.
    Implement with a JSON file for durable storage, or in-memory for
    session storage and tests.
    """

    def get(self, key: str) -> str | None:
        """Fetch a value. Returns None if not found."""
        raise NotImplementedError

    def set(self, key: str, value: str) -> None:
        raise NotImplementedError

    def remove(self, key: str) -> None:
        """Delete a key. Missing keys are ignored."""
        raise NotImplementedError


class MemoryStorage(KeyValueStorage):
    """In-memory storage. Session storage for the CLI, everything for tests."""

    def __init__(self) -> None:
        self.items: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self.items.get(key)

    def set(self, key: str, value: str) -> None:
        self.items[key] = value

    def remove(self, key: str) -> None:
        self.items.pop(key, None)


class JsonFileStorage(KeyValueStorage):
    """
    Durable storage backed by a single JSON object on disk.

    The file is re-read on every call so separate store instances (or
    separate processes run one after another) see each other's writes.
    Writes go to a temp file first and are moved into place.
    """

    def __init__(self, path: str | Path):
        self.path = Path(path)

    def get(self, key: str) -> str | None:
        return self._read().get(key)

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._write(data)

    def remove(self, key: str) -> None:
        data = self._read()
        if key in data:
            del data[key]
            self._write(data)

    def _read(self) -> dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"Storage file is not a JSON object: {self.path}")
        return data

    def _write(self, data: dict[str, str]) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with open(tmp_path, "w", encoding="utf-8") as f:
            json.dump(data, f, sort_keys=True, ensure_ascii=False)
        os.replace(tmp_path, self.path)
