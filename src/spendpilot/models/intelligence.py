"""
Intelligence models — recurring expenses, insights, financial health.

Everything here is derived: recomputed from the expense list on each call
and never persisted.
"""

from __future__ import annotations

from datetime import date, datetime
from enum import Enum

from pydantic import BaseModel, Field

from spendpilot.models.budget import CategoryBudget
from spendpilot.models.expense import ExpenseSummary


class Frequency(str, Enum):
    """Cadence of a recurring expense."""

    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"


class RecurringExpense(BaseModel):
    """An expense that repeats at a statistically consistent interval."""

    description: str
    category: str
    average_amount: float
    frequency: Frequency
    occurrences: int = Field(ge=2)
    confidence: int = Field(ge=0, le=100, description="Interval regularity score 0-100")
    last_occurrence: date
    next_expected: date


class InsightType(str, Enum):
    """Kind of smart insight."""

    WARNING = "warning"
    TIP = "tip"
    ACHIEVEMENT = "achievement"
    PREDICTION = "prediction"


class SmartInsight(BaseModel):
    """A prioritized, human-readable observation about spending."""

    id: str
    type: InsightType
    title: str
    message: str
    category: str | None = None
    amount: float | None = None
    date: datetime
    priority: int = Field(description="Higher is more important")


class HealthLevel(str, Enum):
    """Banded financial health level."""

    POOR = "Poor"
    FAIR = "Fair"
    GOOD = "Good"
    EXCELLENT = "Excellent"


class HealthFactors(BaseModel):
    """The four independently normalized health factors (each 0-100)."""

    budget_adherence: float = Field(ge=0.0, le=100.0)
    savings_rate: float = Field(ge=0.0, le=100.0)
    spending_trend: float = Field(ge=0.0, le=100.0)
    category_balance: float = Field(ge=0.0, le=100.0)


class FinancialHealth(BaseModel):
    """Weighted composite health score with recommendations."""

    score: int = Field(ge=0, le=100)
    level: HealthLevel
    factors: HealthFactors
    recommendations: list[str] = Field(default_factory=list)


class Dashboard(BaseModel):
    """Everything the dashboard shows, computed in one pass."""

    reference_date: date
    generated_at: datetime
    currency: str = "USD"
    summary: ExpenseSummary
    budgets: list[CategoryBudget] = Field(default_factory=list)
    recurring: list[RecurringExpense] = Field(default_factory=list)
    insights: list[SmartInsight] = Field(default_factory=list)
    health: FinancialHealth

    def to_json(self) -> str:
        return self.model_dump_json(indent=2)
