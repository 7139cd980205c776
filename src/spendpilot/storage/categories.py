"""
Category registry — the open set of expense categories.

Ships with six default categories that cannot be deleted; users may add
their own. Names are unique case-insensitively.
"""

from __future__ import annotations

import logging
import time
from datetime import datetime
from typing import Any

from pydantic import ValidationError

from spendpilot.errors import CategoryExistsError, CategoryProtectedError
from spendpilot.models.expense import CustomCategory
from spendpilot.storage.base import CATEGORIES_KEY, KeyValueStore

logger = logging.getLogger("spendpilot.storage.categories")


def default_categories() -> list[CustomCategory]:
    """Fresh copies of the built-in categories."""
    return [
        CustomCategory(id="food", name="Food", icon="🍔", color="#ef4444", is_default=True),
        CustomCategory(id="transportation", name="Transportation", icon="🚗", color="#f97316", is_default=True),
        CustomCategory(id="entertainment", name="Entertainment", icon="🎮", color="#8b5cf6", is_default=True),
        CustomCategory(id="shopping", name="Shopping", icon="🛍️", color="#ec4899", is_default=True),
        CustomCategory(id="bills", name="Bills", icon="📄", color="#3b82f6", is_default=True),
        CustomCategory(id="other", name="Other", icon="📌", color="#6b7280", is_default=True),
    ]


class CategoryRegistry:
    """Persisted, user-extensible list of categories."""

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_all(self) -> list[CustomCategory]:
        raw = self.store.get_json(CATEGORIES_KEY)
        if raw is None:
            return default_categories()
        try:
            return [CustomCategory.model_validate(item) for item in raw]
        except (ValidationError, TypeError) as e:
            logger.warning("Ignoring invalid category data: %s", e)
            return default_categories()

    def _save(self, categories: list[CustomCategory]) -> None:
        self.store.set_json(CATEGORIES_KEY, [c.model_dump(by_alias=True) for c in categories])

    def names(self) -> list[str]:
        return [c.name for c in self.get_all()]

    def get_by_name(self, name: str) -> CustomCategory | None:
        for category in self.get_all():
            if category.name.lower() == name.lower():
                return category
        return None

    def is_known(self, name: str) -> bool:
        return self.get_by_name(name) is not None

    def add(self, name: str, icon: str = "📌", color: str = "#6b7280") -> CustomCategory:
        categories = self.get_all()
        if any(c.name.lower() == name.lower() for c in categories):
            raise CategoryExistsError(f'Category "{name}" already exists')

        category = CustomCategory(
            id=f"custom-{time.time_ns() // 1_000_000}",
            name=name,
            icon=icon,
            color=color,
            created_at=datetime.now().isoformat(),
            is_default=False,
        )
        categories.append(category)
        self._save(categories)
        logger.info("Added category %r", name)
        return category

    def update(self, category_id: str, **changes: Any) -> CustomCategory | None:
        """Apply ``name``/``icon``/``color`` changes; None if the id is unknown."""
        categories = self.get_all()
        for index, category in enumerate(categories):
            if category.id != category_id:
                continue
            new_name = changes.get("name")
            if new_name and any(
                c.id != category_id and c.name.lower() == new_name.lower() for c in categories
            ):
                raise CategoryExistsError(f'Category "{new_name}" already exists')
            allowed = {k: v for k, v in changes.items() if k in ("name", "icon", "color")}
            categories[index] = category.model_copy(update=allowed)
            self._save(categories)
            return categories[index]
        return None

    def delete(self, category_id: str) -> bool:
        categories = self.get_all()
        target = next((c for c in categories if c.id == category_id), None)
        if target is None:
            return False
        if target.is_default:
            raise CategoryProtectedError("Cannot delete default categories")
        self._save([c for c in categories if c.id != category_id])
        logger.info("Deleted category %r", target.name)
        return True

    def reset(self) -> None:
        self._save(default_categories())
