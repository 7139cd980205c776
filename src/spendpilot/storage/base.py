"""
Base key-value store — abstract interface for persisted state.

SpendPilot keeps each collection (expenses, budget settings, goals,
categories) as one JSON-encoded text blob under a fixed string key, the
same shape as browser local storage. Backends only move text around;
encoding and decoding happens here.
"""

from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from typing import Any

logger = logging.getLogger("spendpilot.storage")

EXPENSES_KEY = "expense-tracker-expenses"
BUDGETS_KEY = "expense-tracker-budgets"
GOALS_KEY = "expense-tracker-goals"
CATEGORIES_KEY = "expense-tracker-categories"


class KeyValueStore(ABC):
    """Abstract base class for key-value backends.

    To add a backend, subclass this and implement ``get``, ``set``,
    ``remove`` and ``keys``.

    Example::

        class RedisStore(KeyValueStore):
            name = "redis"

            def get(self, key: str) -> str | None:
                ...
    """

    name: str = "base"

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the raw text stored under ``key`` (None if absent)."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        ...

    @abstractmethod
    def keys(self) -> list[str]:
        ...

    def get_json(self, key: str, default: Any = None) -> Any:
        """Decode the JSON blob under ``key``.

        Unreadable blobs are logged and treated as absent.
        """
        raw = self.get(key)
        if raw is None:
            return default
        try:
            return json.loads(raw)
        except json.JSONDecodeError as e:
            logger.warning("Ignoring corrupt data under %r: %s", key, e)
            return default

    def set_json(self, key: str, value: Any) -> None:
        self.set(key, json.dumps(value, default=str))
