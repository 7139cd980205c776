"""Tests for the category budget calculator."""

from datetime import date

import pytest

from spendpilot.analyzers.budget import BudgetCalculator, BudgetOverview, compute_budgets
from spendpilot.models.budget import BudgetSettings
from spendpilot.models.expense import DEFAULT_CATEGORIES, Expense

REF = date(2025, 1, 15)


def _expense(day: date, amount: float, category: str = "Food", description: str = "Groceries") -> Expense:
    return Expense(
        id=f"{category}-{day.isoformat()}-{amount}",
        date=day,
        amount=amount,
        category=category,
        description=description,
    )


@pytest.fixture
def expenses() -> list[Expense]:
    return [
        _expense(date(2025, 1, 5), 50.0),
        _expense(date(2025, 1, 20), 30.0),
        _expense(date(2024, 12, 28), 100.0),  # previous month
        _expense(date(2025, 1, 1), 900.0, "Bills", "Rent"),
    ]


@pytest.fixture
def settings() -> BudgetSettings:
    return BudgetSettings(budgets={"Food": 100.0, "Bills": 800.0})


class TestBudgetCalculator:
    def test_only_reference_month_counted(self, expenses: list[Expense], settings: BudgetSettings) -> None:
        budgets = BudgetCalculator.analyze(expenses, settings, REF)
        food = next(b for b in budgets if b.category == "Food")

        assert food.spent == 80.0
        assert food.remaining == 20.0
        assert food.percentage_used == pytest.approx(80.0)

    def test_over_budget_goes_negative(self, expenses: list[Expense], settings: BudgetSettings) -> None:
        budgets = BudgetCalculator.analyze(expenses, settings, REF)
        bills = next(b for b in budgets if b.category == "Bills")

        assert bills.remaining == -100.0
        assert bills.percentage_used == pytest.approx(112.5)
        assert bills.is_exceeded

    def test_category_order_follows_settings(self, expenses: list[Expense], settings: BudgetSettings) -> None:
        budgets = BudgetCalculator.analyze(expenses, settings, REF)
        assert [b.category for b in budgets] == ["Food", "Bills"]

    def test_explicit_categories_without_limit(self, expenses: list[Expense], settings: BudgetSettings) -> None:
        budgets = BudgetCalculator.analyze(expenses, settings, REF, categories=DEFAULT_CATEGORIES)
        assert [b.category for b in budgets] == list(DEFAULT_CATEGORIES)

        transport = next(b for b in budgets if b.category == "Transportation")
        assert transport.monthly_limit == 0.0
        assert transport.spent == 0.0
        assert transport.percentage_used == 0.0

    def test_unlimited_category_with_spend(self) -> None:
        settings = BudgetSettings(budgets={"Other": 0.0})
        budgets = BudgetCalculator.analyze([_expense(REF, 25.0, "Other", "Gift")], settings, REF)

        assert budgets[0].spent == 25.0
        assert budgets[0].remaining == -25.0
        assert budgets[0].percentage_used == 0.0

    def test_empty_settings_fall_back_to_defaults(self) -> None:
        budgets = BudgetCalculator.analyze([], BudgetSettings(), REF)
        assert [b.category for b in budgets] == list(DEFAULT_CATEGORIES)
        assert all(b.spent == 0.0 for b in budgets)

    def test_no_expenses(self, settings: BudgetSettings) -> None:
        budgets = compute_budgets([], settings, REF)
        assert all(b.spent == 0 and b.remaining == b.monthly_limit for b in budgets)


class TestBudgetOverview:
    def test_totals(self, expenses: list[Expense], settings: BudgetSettings) -> None:
        overview = BudgetCalculator.overview(expenses, settings, REF)

        assert isinstance(overview, BudgetOverview)
        assert overview.total_budgeted == 900.0
        assert overview.total_spent == 980.0
        assert overview.total_remaining == -80.0
        assert overview.over_budget_count == 1

    def test_overall_percentage_without_budget(self) -> None:
        overview = BudgetCalculator.overview([], BudgetSettings(), REF)
        assert overview.overall_percentage == 0.0

    def test_same_inputs_same_result(self, expenses: list[Expense], settings: BudgetSettings) -> None:
        first = compute_budgets(expenses, settings, REF, categories=DEFAULT_CATEGORIES)
        second = compute_budgets(expenses, settings, REF, categories=DEFAULT_CATEGORIES)
        assert first == second
