"""
Category Budgets — monthly spending against per-category limits.

For the month containing the reference date, sums every category's
expenses and compares them with the configured monthly limit. Categories
without a limit still get an entry (with a zero limit) so the dashboard
always shows the full category set.
"""

from __future__ import annotations

import logging
from collections import defaultdict
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from spendpilot.analyzers.periods import expenses_in_month
from spendpilot.models.budget import BudgetSettings, CategoryBudget
from spendpilot.models.expense import DEFAULT_CATEGORIES, Expense

logger = logging.getLogger("spendpilot.analyzers.budget")


@dataclass
class BudgetOverview:
    """Totals across all category budgets for one month."""

    reference_date: date
    total_budgeted: float
    total_spent: float
    budgets: list[CategoryBudget] = field(default_factory=list)

    @property
    def total_remaining(self) -> float:
        return self.total_budgeted - self.total_spent

    @property
    def overall_percentage(self) -> float:
        if self.total_budgeted == 0:
            return 0.0
        return self.total_spent / self.total_budgeted * 100

    @property
    def over_budget_count(self) -> int:
        return sum(1 for b in self.budgets if b.is_exceeded)


class BudgetCalculator:
    """Compute per-category budget status for a calendar month.

    Example usage::

        settings = BudgetSettings(budgets={"Food": 400, "Bills": 900})
        for budget in BudgetCalculator.analyze(expenses, settings):
            print(f"{budget.category}: {budget.percentage_used:.0f}% used")
    """

    @classmethod
    def known_categories(
        cls,
        settings: BudgetSettings,
        categories: Iterable[str] | None = None,
    ) -> list[str]:
        """Category set to report on, in display order."""
        if categories is not None:
            return list(dict.fromkeys(categories))
        if settings.budgets:
            return list(settings.budgets)
        return list(DEFAULT_CATEGORIES)

    @classmethod
    def analyze(
        cls,
        expenses: list[Expense],
        settings: BudgetSettings,
        reference_date: date | None = None,
        *,
        categories: Iterable[str] | None = None,
    ) -> list[CategoryBudget]:
        """Build one CategoryBudget per known category.

        Args:
            expenses: Full expense list; only the reference month is counted.
            settings: Monthly limits per category (missing = 0).
            reference_date: Any day of the month to report on (default today).
            categories: Explicit category registry; defaults to the keys of
                ``settings.budgets``.

        Returns:
            Budgets in category order. ``remaining`` may be negative and
            ``percentage_used`` may exceed 100.
        """
        ref = reference_date or date.today()
        spent_by_category: dict[str, float] = defaultdict(float)
        for exp in expenses_in_month(expenses, ref):
            spent_by_category[exp.category] += exp.amount

        budgets: list[CategoryBudget] = []
        for category in cls.known_categories(settings, categories):
            spent = spent_by_category.get(category, 0.0)
            limit = settings.budgets.get(category, 0.0) or 0.0
            pct_used = spent / limit * 100 if limit > 0 else 0.0
            budgets.append(
                CategoryBudget(
                    category=category,
                    monthly_limit=limit,
                    spent=spent,
                    remaining=limit - spent,
                    percentage_used=pct_used,
                )
            )

        logger.debug(
            "Computed %d category budgets for %04d-%02d",
            len(budgets),
            ref.year,
            ref.month,
        )
        return budgets

    @classmethod
    def overview(
        cls,
        expenses: list[Expense],
        settings: BudgetSettings,
        reference_date: date | None = None,
        *,
        categories: Iterable[str] | None = None,
    ) -> BudgetOverview:
        """Budgets plus the totals shown above the budget table."""
        ref = reference_date or date.today()
        budgets = cls.analyze(expenses, settings, ref, categories=categories)
        return BudgetOverview(
            reference_date=ref,
            total_budgeted=sum(b.monthly_limit for b in budgets),
            total_spent=sum(b.spent for b in budgets),
            budgets=budgets,
        )


def compute_budgets(
    expenses: list[Expense],
    settings: BudgetSettings,
    reference_date: date | None = None,
    *,
    categories: Iterable[str] | None = None,
) -> list[CategoryBudget]:
    """Quick budget computation."""
    return BudgetCalculator.analyze(expenses, settings, reference_date, categories=categories)
