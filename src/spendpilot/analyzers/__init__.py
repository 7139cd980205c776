"""
SpendPilot Intelligence Analyzers — pure computation modules.

Stateless engines that recompute everything from the expense list passed
in: budgets, recurring expenses, insights and the financial health score.
"""

from spendpilot.analyzers.budget import BudgetCalculator, BudgetOverview, compute_budgets
from spendpilot.analyzers.health import HealthScorer, score_health
from spendpilot.analyzers.insights import InsightGenerator, generate_insights
from spendpilot.analyzers.periods import date_range_from_preset, month_bounds, previous_month
from spendpilot.analyzers.recurring import RecurringDetector, detect_recurring
from spendpilot.analyzers.summary import (
    amount_range,
    calculate_summary,
    daily_spending,
    filter_expenses,
)

__all__ = [
    # Budgets
    "BudgetCalculator",
    "BudgetOverview",
    "compute_budgets",
    # Recurring detection
    "RecurringDetector",
    "detect_recurring",
    # Insights
    "InsightGenerator",
    "generate_insights",
    # Health score
    "HealthScorer",
    "score_health",
    # Periods & summaries
    "date_range_from_preset",
    "month_bounds",
    "previous_month",
    "amount_range",
    "calculate_summary",
    "daily_spending",
    "filter_expenses",
]
