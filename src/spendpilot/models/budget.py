"""
Budget and savings goal models.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from spendpilot.models.expense import DEFAULT_CATEGORIES


class CategoryBudget(BaseModel):
    """Spending against the monthly limit of one category (derived)."""

    category: str
    monthly_limit: float = 0.0
    spent: float = 0.0
    remaining: float = 0.0
    percentage_used: float = 0.0

    @property
    def has_limit(self) -> bool:
        return self.monthly_limit > 0

    @property
    def is_exceeded(self) -> bool:
        return self.has_limit and self.percentage_used >= 100


class BudgetSettings(BaseModel):
    """User-configured monthly limits per category."""

    budgets: dict[str, float] = Field(default_factory=dict)
    currency: str = "USD"

    @property
    def total_budget(self) -> float:
        return sum(self.budgets.values())


def default_budget_settings(
    categories: Iterable[str] | None = None,
    currency: str = "USD",
) -> BudgetSettings:
    """Build a fresh zero-limit settings object.

    A new dict is created on every call so callers can mutate the result
    freely.
    """
    names = list(categories) if categories is not None else list(DEFAULT_CATEGORIES)
    return BudgetSettings(budgets={name: 0.0 for name in names}, currency=currency)


class GoalPriority(str, Enum):
    """How important a savings goal is."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SavingsGoal(BaseModel):
    """A savings target the user is working towards."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    target_amount: float = Field(gt=0, alias="targetAmount")
    current_amount: float = Field(default=0.0, ge=0, alias="currentAmount")
    deadline: date
    category: str | None = None
    priority: GoalPriority = GoalPriority.MEDIUM
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")

    @property
    def progress_percentage(self) -> float:
        """Progress towards the target, capped at 100."""
        return min(100.0, self.current_amount / self.target_amount * 100)

    @property
    def is_completed(self) -> bool:
        return self.progress_percentage >= 100

    def days_remaining(self, reference_date: date | None = None) -> int:
        """Days until the deadline (negative once it has passed)."""
        ref = reference_date or date.today()
        return (self.deadline - ref).days

    def is_overdue(self, reference_date: date | None = None) -> bool:
        return self.days_remaining(reference_date) < 0 and not self.is_completed
