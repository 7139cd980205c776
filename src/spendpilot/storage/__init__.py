"""Storage package — key-value backends and the stores built on them."""
from spendpilot.storage.backends import JSONFileStore, MemoryStore
from spendpilot.storage.base import KeyValueStore
from spendpilot.storage.budgets import BudgetStore
from spendpilot.storage.categories import CategoryRegistry, default_categories
from spendpilot.storage.expenses import ExpenseStore

__all__ = [
    "BudgetStore",
    "CategoryRegistry",
    "ExpenseStore",
    "JSONFileStore",
    "KeyValueStore",
    "MemoryStore",
    "default_categories",
]
