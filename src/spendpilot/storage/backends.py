"""
Concrete key-value backends: a directory of JSON files, and in-memory.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from spendpilot.storage.base import KeyValueStore

logger = logging.getLogger("spendpilot.storage.backends")

_SAFE_KEY = re.compile(r"^[A-Za-z0-9._-]+$")


class JSONFileStore(KeyValueStore):
    """Store each key as ``<data_dir>/<key>.json``.

    Usage::

        store = JSONFileStore("~/.spendpilot")
        store.set_json("expense-tracker-expenses", [])
    """

    name = "file"

    def __init__(self, data_dir: str | Path) -> None:
        self.data_dir = Path(data_dir).expanduser()

    def _path(self, key: str) -> Path:
        if not _SAFE_KEY.match(key):
            raise ValueError(f"Invalid storage key: {key!r}")
        return self.data_dir / f"{key}.json"

    def get(self, key: str) -> str | None:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self._path(key).write_text(value, encoding="utf-8")
        logger.debug("Wrote %d bytes to %s", len(value), key)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)

    def keys(self) -> list[str]:
        if not self.data_dir.exists():
            return []
        return sorted(p.stem for p in self.data_dir.glob("*.json"))


class MemoryStore(KeyValueStore):
    """Process-local store; nothing survives the process."""

    name = "memory"

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, key: str) -> str | None:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)

    def keys(self) -> list[str]:
        return sorted(self._data)
