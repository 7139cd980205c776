"""
Financial Health Score — weighted composite of four behavioural factors.

| Factor            | Weight | Source                                   |
|-------------------|--------|------------------------------------------|
| Budget adherence  | 35%    | average limit usage, penalised past 70%  |
| Savings rate      | 30%    | unspent share of the total budget (x2)   |
| Spending trend    | 20%    | month-over-month change in spend         |
| Category balance  | 15%    | spend spread over more than one category |

Each factor is scored 0-100 on its own; the weighted sum is rounded to an
integer score and banded into Poor / Fair / Good / Excellent.

Budget adherence is capped at 100: usage below 70% earns full marks rather
than a score above the factor range.
"""

from __future__ import annotations

import logging
from datetime import date

from spendpilot.analyzers.periods import month_total, previous_month, round_half_up
from spendpilot.models.budget import CategoryBudget, SavingsGoal
from spendpilot.models.expense import Expense
from spendpilot.models.intelligence import FinancialHealth, HealthFactors, HealthLevel

logger = logging.getLogger("spendpilot.analyzers.health")

WEIGHTS: dict[str, float] = {
    "budget_adherence": 0.35,
    "savings_rate": 0.30,
    "spending_trend": 0.20,
    "category_balance": 0.15,
}

_RECOMMENDATIONS: dict[str, str] = {
    "budget_adherence": (
        "Consider reviewing and adjusting your category budgets to better match "
        "your spending patterns."
    ),
    "savings_rate": "Try to increase your savings rate by reducing discretionary spending.",
    "spending_trend": "Your spending is trending upward. Look for areas where you can cut back.",
    "category_balance": (
        "Your spending is concentrated in few categories. Diversifying can reduce risk."
    ),
}

_ALL_CLEAR = "Great job! Keep maintaining your excellent financial habits."


def _clamp(value: float, low: float = 0.0, high: float = 100.0) -> float:
    return max(low, min(high, value))


class HealthScorer:
    """Score overall financial health from the current month's picture."""

    ADHERENCE_PENALTY_START = 70.0
    THRESHOLDS: dict[str, float] = {
        "budget_adherence": 70.0,
        "savings_rate": 50.0,
        "spending_trend": 50.0,
        "category_balance": 50.0,
    }

    @classmethod
    def analyze(
        cls,
        expenses: list[Expense],
        budgets: list[CategoryBudget],
        goals: list[SavingsGoal] | None = None,
        reference_date: date | None = None,
    ) -> FinancialHealth:
        """Compute the health score.

        ``goals`` is accepted for future use and does not affect the score.
        """
        ref = reference_date or date.today()
        this_month = month_total(expenses, ref)
        last_month = month_total(expenses, previous_month(ref))

        factors = HealthFactors(
            budget_adherence=cls._budget_adherence(budgets),
            savings_rate=cls._savings_rate(budgets, this_month),
            spending_trend=cls._spending_trend(this_month, last_month),
            category_balance=cls._category_balance(budgets),
        )
        score = round_half_up(sum(getattr(factors, name) * w for name, w in WEIGHTS.items()))

        health = FinancialHealth(
            score=score,
            level=cls._level(score),
            factors=factors,
            recommendations=cls._recommendations(factors),
        )
        logger.debug("Health score %d (%s) for %s", health.score, health.level.value, ref.isoformat())
        return health

    # ------------------------------------------------------------------ #
    #  Factors                                                             #
    # ------------------------------------------------------------------ #

    @classmethod
    def _budget_adherence(cls, budgets: list[CategoryBudget]) -> float:
        with_limits = [b for b in budgets if b.monthly_limit > 0]
        if not with_limits:
            return 100.0
        avg_usage = sum(min(100.0, b.percentage_used) for b in with_limits) / len(with_limits)
        # No penalty until average usage passes 70%.
        return _clamp(100 - (avg_usage - cls.ADHERENCE_PENALTY_START))

    @staticmethod
    def _savings_rate(budgets: list[CategoryBudget], spent_this_month: float) -> float:
        total_budget = sum(b.monthly_limit for b in budgets)
        if total_budget <= 0:
            return 0.0
        saved = total_budget - spent_this_month
        # x2: saving half the budget is a perfect score
        return _clamp(saved / total_budget * 100 * 2)

    @staticmethod
    def _spending_trend(this_month: float, last_month: float) -> float:
        if last_month <= 0:
            return 50.0
        change = (this_month - last_month) / last_month * 100
        return _clamp(50 - change)

    @staticmethod
    def _category_balance(budgets: list[CategoryBudget]) -> float:
        with_spend = sum(1 for b in budgets if b.spent > 0)
        return 80.0 if with_spend > 1 else 50.0

    @staticmethod
    def _level(score: int) -> HealthLevel:
        if score >= 80:
            return HealthLevel.EXCELLENT
        if score >= 60:
            return HealthLevel.GOOD
        if score >= 40:
            return HealthLevel.FAIR
        return HealthLevel.POOR

    @classmethod
    def _recommendations(cls, factors: HealthFactors) -> list[str]:
        recommendations = [
            _RECOMMENDATIONS[name]
            for name, threshold in cls.THRESHOLDS.items()
            if getattr(factors, name) < threshold
        ]
        return recommendations or [_ALL_CLEAR]


def score_health(
    expenses: list[Expense],
    budgets: list[CategoryBudget],
    goals: list[SavingsGoal] | None = None,
    reference_date: date | None = None,
) -> FinancialHealth:
    """Quick health scoring."""
    return HealthScorer.analyze(expenses, budgets, goals, reference_date)
