"""Tests for storage backends and stores."""

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from spendpilot.errors import (
    CategoryExistsError,
    CategoryProtectedError,
    ExpenseNotFoundError,
    GoalNotFoundError,
)
from spendpilot.models.expense import DEFAULT_CATEGORIES
from spendpilot.storage import (
    BudgetStore,
    CategoryRegistry,
    ExpenseStore,
    JSONFileStore,
    MemoryStore,
)
from spendpilot.storage.base import BUDGETS_KEY, EXPENSES_KEY

NOW = datetime(2025, 1, 15, 9, 0)


@pytest.fixture
def file_store(tmp_path: Path) -> JSONFileStore:
    return JSONFileStore(tmp_path / "data")


class TestJSONFileStore:
    def test_set_and_get(self, file_store: JSONFileStore) -> None:
        file_store.set_json(EXPENSES_KEY, [{"a": 1}])

        assert file_store.get_json(EXPENSES_KEY) == [{"a": 1}]
        assert (file_store.data_dir / f"{EXPENSES_KEY}.json").exists()
        assert file_store.keys() == [EXPENSES_KEY]

    def test_missing_key(self, file_store: JSONFileStore) -> None:
        assert file_store.get("nothing") is None
        assert file_store.get_json("nothing", default=[]) == []
        assert file_store.keys() == []

    def test_remove_missing_is_ok(self, file_store: JSONFileStore) -> None:
        file_store.remove(EXPENSES_KEY)
        file_store.set(EXPENSES_KEY, "[]")
        file_store.remove(EXPENSES_KEY)
        assert file_store.get(EXPENSES_KEY) is None

    def test_rejects_path_like_keys(self, file_store: JSONFileStore) -> None:
        with pytest.raises(ValueError):
            file_store.set("../escape", "{}")

    def test_corrupt_json_treated_as_absent(self, file_store: JSONFileStore) -> None:
        file_store.set(EXPENSES_KEY, "{not json")
        assert file_store.get_json(EXPENSES_KEY, default=[]) == []


class TestMemoryStore:
    def test_round_trip(self) -> None:
        store = MemoryStore()
        store.set_json(BUDGETS_KEY, {"budgets": {"Food": 100}})
        assert store.get_json(BUDGETS_KEY) == {"budgets": {"Food": 100}}
        store.remove(BUDGETS_KEY)
        assert store.keys() == []


class TestExpenseStore:
    def test_create_and_persist(self, file_store: JSONFileStore) -> None:
        store = ExpenseStore(file_store)
        exp = store.create(date=date(2025, 1, 15), amount=12.5, category="Food", description="Lunch", now=NOW)

        reloaded = ExpenseStore(JSONFileStore(file_store.data_dir)).get_all()
        assert reloaded == [exp]
        assert exp.created_at == NOW
        raw = json.loads(file_store.get(EXPENSES_KEY))
        assert raw[0]["createdAt"] == "2025-01-15T09:00:00"

    def test_ids_are_unique(self) -> None:
        store = ExpenseStore(MemoryStore())
        a = store.create(date=date(2025, 1, 1), amount=1, category="Food", description="a")
        b = store.create(date=date(2025, 1, 1), amount=1, category="Food", description="a")
        assert a.id != b.id

    def test_update_keeps_identity(self) -> None:
        store = ExpenseStore(MemoryStore())
        exp = store.create(date=date(2025, 1, 15), amount=12.5, category="Food", description="Lunch", now=NOW)

        later = datetime(2025, 1, 16, 8, 0)
        changed = exp.model_copy(update={"amount": 14.0, "id": "ignored"})
        updated = store.update(exp.id, changed, now=later)

        assert updated.id == exp.id
        assert updated.amount == 14.0
        assert updated.created_at == NOW
        assert updated.updated_at == later
        assert store.get(exp.id).amount == 14.0

    def test_delete(self) -> None:
        store = ExpenseStore(MemoryStore())
        exp = store.create(date=date(2025, 1, 15), amount=5, category="Food", description="Snack")
        store.delete(exp.id)
        assert store.get_all() == []

    def test_missing_expense(self) -> None:
        store = ExpenseStore(MemoryStore())
        with pytest.raises(ExpenseNotFoundError):
            store.get("nope")
        with pytest.raises(ExpenseNotFoundError):
            store.delete("nope")
        with pytest.raises(KeyError):
            store.get("nope")

    def test_invalid_records_skipped(self) -> None:
        backend = MemoryStore()
        backend.set_json(
            EXPENSES_KEY,
            [
                {"id": "ok", "date": "2025-01-01", "amount": 5, "category": "Food", "description": "x"},
                {"id": "bad", "date": "2025-01-01", "amount": -5, "category": "Food", "description": "x"},
            ],
        )
        assert [e.id for e in ExpenseStore(backend).get_all()] == ["ok"]


class TestBudgetStore:
    def test_default_settings(self) -> None:
        store = BudgetStore(MemoryStore(), categories=DEFAULT_CATEGORIES)
        settings = store.get_settings()
        assert settings.budgets == {name: 0.0 for name in DEFAULT_CATEGORIES}
        assert settings.currency == "USD"

    def test_set_limit_persists(self) -> None:
        backend = MemoryStore()
        BudgetStore(backend).set_limit("Food", 400)
        assert BudgetStore(backend).get_settings().budgets["Food"] == 400

    def test_negative_limit_rejected(self) -> None:
        with pytest.raises(ValueError):
            BudgetStore(MemoryStore()).set_limit("Food", -1)

    def test_goal_lifecycle(self) -> None:
        store = BudgetStore(MemoryStore())
        goal = store.create_goal(name="Vacation", target_amount=2000, deadline=date(2025, 8, 1), now=NOW)

        updated = store.update_progress(goal.id, 500, now=datetime(2025, 2, 1))
        assert updated.current_amount == 500
        assert updated.created_at == NOW
        assert store.get_goals()[0].progress_percentage == 25.0

        store.delete_goal(goal.id)
        assert store.get_goals() == []

    def test_missing_goal(self) -> None:
        store = BudgetStore(MemoryStore())
        with pytest.raises(GoalNotFoundError):
            store.update_progress("nope", 10)
        with pytest.raises(GoalNotFoundError):
            store.delete_goal("nope")


class TestCategoryRegistry:
    def test_defaults(self) -> None:
        registry = CategoryRegistry(MemoryStore())
        categories = registry.get_all()

        assert [c.name for c in categories] == list(DEFAULT_CATEGORIES)
        assert all(c.is_default for c in categories)

    def test_add_custom(self) -> None:
        backend = MemoryStore()
        pets = CategoryRegistry(backend).add("Pets", icon="🐶", color="#10b981")

        assert pets.id.startswith("custom-")
        assert pets.is_default is False
        assert CategoryRegistry(backend).is_known("pets")

    def test_duplicate_name_rejected(self) -> None:
        registry = CategoryRegistry(MemoryStore())
        with pytest.raises(CategoryExistsError):
            registry.add("food")

    def test_update(self) -> None:
        registry = CategoryRegistry(MemoryStore())
        pets = registry.add("Pets")
        renamed = registry.update(pets.id, name="Animals", is_default=True)

        assert renamed.name == "Animals"
        assert renamed.is_default is False
        assert registry.update("missing", name="x") is None
        with pytest.raises(CategoryExistsError):
            registry.update(pets.id, name="Bills")

    def test_delete(self) -> None:
        registry = CategoryRegistry(MemoryStore())
        pets = registry.add("Pets")

        assert registry.delete(pets.id) is True
        assert registry.delete("missing") is False
        with pytest.raises(CategoryProtectedError):
            registry.delete("food")

    def test_reset(self) -> None:
        registry = CategoryRegistry(MemoryStore())
        registry.add("Pets")
        registry.reset()
        assert registry.names() == list(DEFAULT_CATEGORIES)
