"""
Expense data models — expenses, categories, filters, summaries.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

DEFAULT_CATEGORIES: tuple[str, ...] = (
    "Food",
    "Transportation",
    "Entertainment",
    "Shopping",
    "Bills",
    "Other",
)


class Expense(BaseModel):
    """A single recorded expense.

    Serialized with the camelCase keys used by the persisted JSON blob
    (``createdAt``/``updatedAt``); either spelling is accepted on input.
    """

    model_config = ConfigDict(populate_by_name=True)

    id: str
    date: date
    amount: float = Field(gt=0, description="Positive amount in the configured currency")
    category: str
    description: str
    created_at: datetime = Field(default_factory=datetime.now, alias="createdAt")
    updated_at: datetime = Field(default_factory=datetime.now, alias="updatedAt")

    @field_validator("description")
    @classmethod
    def _description_not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("Description is required")
        return value

    @property
    def normalized_description(self) -> str:
        """Grouping key used for recurring-expense detection."""
        return self.description.strip().lower()

    def to_storage(self) -> dict[str, Any]:
        return self.model_dump(mode="json", by_alias=True)


class CustomCategory(BaseModel):
    """A user- or system-defined expense category."""

    model_config = ConfigDict(populate_by_name=True)

    id: str
    name: str
    icon: str = "📌"
    color: str = "#6b7280"
    created_at: str = Field(default="", alias="createdAt")
    is_default: bool = Field(default=False, alias="isDefault")


class DatePreset(str, Enum):
    """Named date ranges offered by the expense filters."""

    TODAY = "today"
    YESTERDAY = "yesterday"
    THIS_WEEK = "this_week"
    LAST_WEEK = "last_week"
    THIS_MONTH = "this_month"
    LAST_MONTH = "last_month"
    LAST_7_DAYS = "last_7_days"
    LAST_30_DAYS = "last_30_days"
    LAST_90_DAYS = "last_90_days"
    THIS_YEAR = "this_year"
    LAST_YEAR = "last_year"
    CUSTOM = "custom"


class ExpenseFilters(BaseModel):
    """Criteria for narrowing down the expense list."""

    categories: list[str] = Field(default_factory=list)
    start_date: date | None = None
    end_date: date | None = None
    search_query: str | None = None
    date_preset: DatePreset | None = None
    min_amount: float | None = None
    max_amount: float | None = None


class ExpenseSummary(BaseModel):
    """Aggregate figures shown on the dashboard."""

    total_spending: float = 0.0
    monthly_spending: float = 0.0
    category_breakdown: dict[str, float] = Field(default_factory=dict)
    expense_count: int = 0
    average_expense: float = 0.0


def validate_expense_form(
    amount: str | None,
    description: str | None,
    date_value: str | None,
) -> dict[str, str]:
    """Validate raw form input, returning a field -> message map.

    An empty map means the input is valid.
    """
    errors: dict[str, str] = {}

    try:
        parsed = float(amount) if amount else 0.0
    except ValueError:
        parsed = 0.0
    if parsed <= 0:
        errors["amount"] = "Amount must be greater than 0"

    if not description or not description.strip():
        errors["description"] = "Description is required"

    if not date_value:
        errors["date"] = "Date is required"
    else:
        try:
            date.fromisoformat(date_value)
        except ValueError:
            errors["date"] = "Date must be in YYYY-MM-DD format"

    return errors
