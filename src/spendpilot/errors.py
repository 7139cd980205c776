"""
Exceptions raised at the storage and tracker boundary.

The analyzers never raise on well-formed input; these cover lookups and
registry rules only.
"""

from __future__ import annotations


class SpendPilotError(Exception):
    """Base class for SpendPilot errors."""


class ExpenseNotFoundError(SpendPilotError, KeyError):
    def __init__(self, expense_id: str) -> None:
        super().__init__(f"Expense not found: {expense_id}")
        self.expense_id = expense_id

    def __str__(self) -> str:
        return self.args[0]


class GoalNotFoundError(SpendPilotError, KeyError):
    def __init__(self, goal_id: str) -> None:
        super().__init__(f"Savings goal not found: {goal_id}")
        self.goal_id = goal_id

    def __str__(self) -> str:
        return self.args[0]


class CategoryExistsError(SpendPilotError, ValueError):
    """A category with the same name (case-insensitive) already exists."""


class CategoryProtectedError(SpendPilotError, ValueError):
    """Default categories cannot be deleted."""


class UnknownCategoryError(SpendPilotError, ValueError):
    """The category is not in the registry."""
