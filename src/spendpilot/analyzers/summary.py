"""
Expense summaries and filtering for list and dashboard views.
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from datetime import date, timedelta

from spendpilot.analyzers.periods import date_range_from_preset, month_total
from spendpilot.models.expense import (
    DEFAULT_CATEGORIES,
    DatePreset,
    Expense,
    ExpenseFilters,
    ExpenseSummary,
)


def _amount_text(amount: float) -> str:
    # Match how amounts are typed in: 15.0 -> "15", 12.5 -> "12.5"
    return str(int(amount)) if amount == int(amount) else repr(amount)


def filter_expenses(
    expenses: list[Expense],
    filters: ExpenseFilters,
    reference_date: date | None = None,
) -> list[Expense]:
    """Apply category, date, amount and free-text filters.

    A date preset other than ``custom`` overrides explicit start/end dates.
    All ranges are inclusive.
    """
    start, end = filters.start_date, filters.end_date
    if filters.date_preset and filters.date_preset != DatePreset.CUSTOM:
        start, end = date_range_from_preset(filters.date_preset, reference_date)

    query = (filters.search_query or "").lower()
    categories = set(filters.categories)

    result: list[Expense] = []
    for exp in expenses:
        if categories and exp.category not in categories:
            continue
        if start and exp.date < start:
            continue
        if end and exp.date > end:
            continue
        if filters.min_amount is not None and exp.amount < filters.min_amount:
            continue
        if filters.max_amount is not None and exp.amount > filters.max_amount:
            continue
        if query and not (
            query in exp.description.lower()
            or query in exp.category.lower()
            or query in _amount_text(exp.amount)
        ):
            continue
        result.append(exp)
    return result


def calculate_summary(
    expenses: list[Expense],
    reference_date: date | None = None,
    categories: Iterable[str] | None = None,
) -> ExpenseSummary:
    """Overall totals plus an all-time per-category breakdown."""
    ref = reference_date or date.today()
    total = sum(e.amount for e in expenses)

    breakdown: dict[str, float] = {
        name: 0.0 for name in (categories if categories is not None else DEFAULT_CATEGORIES)
    }
    for exp in expenses:
        breakdown[exp.category] = breakdown.get(exp.category, 0.0) + exp.amount

    return ExpenseSummary(
        total_spending=total,
        monthly_spending=month_total(expenses, ref),
        category_breakdown=breakdown,
        expense_count=len(expenses),
        average_expense=total / len(expenses) if expenses else 0.0,
    )


def amount_range(expenses: list[Expense]) -> tuple[int, int]:
    """Whole-number bounds for the amount slider."""
    if not expenses:
        return 0, 1000
    amounts = [e.amount for e in expenses]
    return math.floor(min(amounts)), math.ceil(max(amounts))


def daily_spending(
    expenses: list[Expense],
    days: int = 7,
    reference_date: date | None = None,
) -> list[tuple[date, float]]:
    """Per-day totals for the trailing ``days`` days, oldest first."""
    ref = reference_date or date.today()
    window = [ref - timedelta(days=offset) for offset in range(days - 1, -1, -1)]
    totals = {d: 0.0 for d in window}
    for exp in expenses:
        if exp.date in totals:
            totals[exp.date] += exp.amount
    return [(d, totals[d]) for d in window]
