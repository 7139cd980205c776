"""
Smart Insights — rule-based, prioritized observations about spending.

Rules run in a fixed order and each may add insights:
1. Budget exceeded (priority 5)
2. Budget warning at 80%+ (priority 4)
3. Month-over-month spending trend (priority 4 / 3)
4. Upcoming recurring expenses within a week (priority 3)
5. Budget mastery achievement (priority 2)
6. Top-category tip (priority 2)

The result is stably sorted by priority, so equal-priority insights keep
rule order.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any

from spendpilot.analyzers.periods import expenses_in_month, month_total, previous_month
from spendpilot.models.budget import CategoryBudget
from spendpilot.models.expense import Expense
from spendpilot.models.intelligence import InsightType, RecurringExpense, SmartInsight

logger = logging.getLogger("spendpilot.analyzers.insights")


@dataclass
class _InsightBuilder:
    """Collects insights with sequential ids and a shared timestamp."""

    now: datetime
    insights: list[SmartInsight] = field(default_factory=list)

    def add(self, kind: InsightType, title: str, message: str, priority: int, **extra: Any) -> None:
        self.insights.append(
            SmartInsight(
                id=f"insight-{len(self.insights)}",
                type=kind,
                title=title,
                message=message,
                date=self.now,
                priority=priority,
                **extra,
            )
        )


class InsightGenerator:
    """Generate smart insights from expenses, budgets and recurring items."""

    EXCEEDED_PCT = 100.0
    WARNING_PCT = 80.0
    TREND_CHANGE_PCT = 20.0
    UPCOMING_WINDOW_DAYS = 7
    MASTERY_MAX_PCT = 90.0
    MASTERY_MIN_EXPENSES = 5
    TOP_CATEGORY_SHARE = 0.4

    @classmethod
    def analyze(
        cls,
        expenses: list[Expense],
        budgets: list[CategoryBudget],
        recurring: list[RecurringExpense],
        reference_date: date | None = None,
        *,
        now: datetime | None = None,
    ) -> list[SmartInsight]:
        """Run every rule and return insights, most important first.

        Args:
            expenses: Full expense list.
            budgets: Category budgets for the reference month.
            recurring: Detected recurring expenses.
            reference_date: Day treated as "today" (default: today).
            now: Timestamp stamped on each insight (default: now).
        """
        ref = reference_date or date.today()
        builder = _InsightBuilder(now=now or datetime.now())

        month_expenses = expenses_in_month(expenses, ref)
        this_month_total = sum(e.amount for e in month_expenses)
        last_month_total = month_total(expenses, previous_month(ref))

        cls._budget_rules(builder, budgets)
        cls._trend_rule(builder, this_month_total, last_month_total)
        cls._upcoming_rule(builder, recurring, ref)
        cls._mastery_rule(builder, budgets, len(month_expenses))
        cls._top_category_rule(builder, budgets, this_month_total)

        insights = sorted(builder.insights, key=lambda i: i.priority, reverse=True)
        logger.debug("Generated %d insights for %s", len(insights), ref.isoformat())
        return insights

    # ------------------------------------------------------------------ #
    #  Rules                                                               #
    # ------------------------------------------------------------------ #

    @classmethod
    def _budget_rules(cls, builder: _InsightBuilder, budgets: list[CategoryBudget]) -> None:
        for budget in budgets:
            if budget.monthly_limit <= 0:
                continue
            if budget.percentage_used >= cls.EXCEEDED_PCT:
                builder.add(
                    InsightType.WARNING,
                    f"{budget.category} Budget Exceeded!",
                    f"You've spent ${budget.spent:.2f} of your ${budget.monthly_limit:.2f} budget "
                    f"({budget.percentage_used:.0f}%). Consider reducing expenses in this category.",
                    priority=5,
                    category=budget.category,
                )
            elif budget.percentage_used >= cls.WARNING_PCT:
                builder.add(
                    InsightType.WARNING,
                    f"{budget.category} Budget Warning",
                    f"You're at {budget.percentage_used:.0f}% of your {budget.category} budget "
                    f"with ${budget.remaining:.2f} remaining this month.",
                    priority=4,
                    category=budget.category,
                )

    @classmethod
    def _trend_rule(cls, builder: _InsightBuilder, this_month: float, last_month: float) -> None:
        if last_month <= 0:
            return
        change = (this_month - last_month) / last_month * 100
        if change > cls.TREND_CHANGE_PCT:
            builder.add(
                InsightType.WARNING,
                "Spending Increased Significantly",
                f"Your spending is up {change:.0f}% compared to last month "
                f"(${this_month:.2f} vs ${last_month:.2f}).",
                priority=4,
            )
        elif change < -cls.TREND_CHANGE_PCT:
            builder.add(
                InsightType.ACHIEVEMENT,
                "Great Job Saving!",
                f"You've reduced spending by {abs(change):.0f}% compared to last month. "
                "Keep up the good work!",
                priority=3,
            )

    @classmethod
    def _upcoming_rule(
        cls,
        builder: _InsightBuilder,
        recurring: list[RecurringExpense],
        ref: date,
    ) -> None:
        window_end = ref + timedelta(days=cls.UPCOMING_WINDOW_DAYS)
        upcoming = [r for r in recurring if ref <= r.next_expected <= window_end]
        if not upcoming:
            return
        total = sum(r.average_amount for r in upcoming)
        builder.add(
            InsightType.PREDICTION,
            "Upcoming Recurring Expenses",
            f"{len(upcoming)} recurring expense(s) expected this week (~${total:.2f}). Plan ahead!",
            priority=3,
            amount=total,
        )

    @classmethod
    def _mastery_rule(
        cls,
        builder: _InsightBuilder,
        budgets: list[CategoryBudget],
        month_expense_count: int,
    ) -> None:
        all_set = all(b.monthly_limit > 0 for b in budgets)
        under_control = all(b.percentage_used < cls.MASTERY_MAX_PCT for b in budgets if b.monthly_limit > 0)
        if all_set and under_control and month_expense_count > cls.MASTERY_MIN_EXPENSES:
            builder.add(
                InsightType.ACHIEVEMENT,
                "Budget Master!",
                "All your category budgets are on track. You're in great control of your finances!",
                priority=2,
            )

    @classmethod
    def _top_category_rule(
        cls,
        builder: _InsightBuilder,
        budgets: list[CategoryBudget],
        this_month_total: float,
    ) -> None:
        spending = [b for b in budgets if b.spent > 0]
        if not spending or this_month_total <= 0:
            return
        # sorted() is stable, so the first category wins a tie
        top = sorted(spending, key=lambda b: b.spent, reverse=True)[0]
        if top.spent > this_month_total * cls.TOP_CATEGORY_SHARE:
            share = top.spent / this_month_total * 100
            builder.add(
                InsightType.TIP,
                f"{top.category} is Your Top Expense",
                f"{top.category} accounts for {share:.0f}% of your spending. "
                "Look for opportunities to optimize this category.",
                priority=2,
                category=top.category,
            )


def generate_insights(
    expenses: list[Expense],
    budgets: list[CategoryBudget],
    recurring: list[RecurringExpense],
    reference_date: date | None = None,
    *,
    now: datetime | None = None,
) -> list[SmartInsight]:
    """Quick insight generation."""
    return InsightGenerator.analyze(expenses, budgets, recurring, reference_date, now=now)
