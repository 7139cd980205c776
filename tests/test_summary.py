"""Tests for expense filtering and summaries."""

from datetime import date

import pytest

from spendpilot.analyzers.summary import (
    amount_range,
    calculate_summary,
    daily_spending,
    filter_expenses,
)
from spendpilot.models.expense import DEFAULT_CATEGORIES, DatePreset, Expense, ExpenseFilters

REF = date(2025, 1, 15)


@pytest.fixture
def expenses() -> list[Expense]:
    rows = [
        (date(2025, 1, 15), 12.5, "Food", "Lunch at cafe"),
        (date(2025, 1, 14), 15.0, "Entertainment", "Netflix"),
        (date(2025, 1, 2), 60.0, "Transportation", "Gas"),
        (date(2024, 12, 20), 250.0, "Shopping", "Winter jacket"),
    ]
    return [
        Expense(id=f"e{i}", date=d, amount=amt, category=cat, description=desc)
        for i, (d, amt, cat, desc) in enumerate(rows)
    ]


class TestFilterExpenses:
    def test_no_filters(self, expenses: list[Expense]) -> None:
        assert filter_expenses(expenses, ExpenseFilters()) == expenses

    def test_by_category(self, expenses: list[Expense]) -> None:
        result = filter_expenses(expenses, ExpenseFilters(categories=["Food", "Shopping"]))
        assert [e.id for e in result] == ["e0", "e3"]

    def test_inclusive_date_range(self, expenses: list[Expense]) -> None:
        filters = ExpenseFilters(start_date=date(2025, 1, 2), end_date=date(2025, 1, 14))
        assert [e.id for e in filter_expenses(expenses, filters)] == ["e1", "e2"]

    def test_amount_bounds(self, expenses: list[Expense]) -> None:
        filters = ExpenseFilters(min_amount=15.0, max_amount=60.0)
        assert [e.id for e in filter_expenses(expenses, filters)] == ["e1", "e2"]

    def test_search_description_and_category(self, expenses: list[Expense]) -> None:
        assert [e.id for e in filter_expenses(expenses, ExpenseFilters(search_query="CAFE"))] == ["e0"]
        assert [e.id for e in filter_expenses(expenses, ExpenseFilters(search_query="transport"))] == ["e2"]

    def test_search_amount_text(self, expenses: list[Expense]) -> None:
        assert [e.id for e in filter_expenses(expenses, ExpenseFilters(search_query="12.5"))] == ["e0"]
        assert [e.id for e in filter_expenses(expenses, ExpenseFilters(search_query="250"))] == ["e3"]

    def test_preset_overrides_dates(self, expenses: list[Expense]) -> None:
        filters = ExpenseFilters(
            date_preset=DatePreset.LAST_MONTH,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 31),
        )
        assert [e.id for e in filter_expenses(expenses, filters, REF)] == ["e3"]

    def test_custom_preset_uses_dates(self, expenses: list[Expense]) -> None:
        filters = ExpenseFilters(
            date_preset=DatePreset.CUSTOM,
            start_date=date(2025, 1, 14),
            end_date=date(2025, 1, 15),
        )
        assert [e.id for e in filter_expenses(expenses, filters, REF)] == ["e0", "e1"]


class TestSummary:
    def test_calculate_summary(self, expenses: list[Expense]) -> None:
        summary = calculate_summary(expenses, REF)

        assert summary.total_spending == pytest.approx(337.5)
        assert summary.monthly_spending == pytest.approx(87.5)
        assert summary.expense_count == 4
        assert summary.average_expense == pytest.approx(84.375)
        assert list(summary.category_breakdown)[: len(DEFAULT_CATEGORIES)] == list(DEFAULT_CATEGORIES)
        assert summary.category_breakdown["Bills"] == 0.0
        assert summary.category_breakdown["Shopping"] == 250.0

    def test_unknown_category_is_added(self) -> None:
        exp = Expense(id="x", date=REF, amount=5, category="Pets", description="Treats")
        summary = calculate_summary([exp], REF, categories=["Food"])
        assert summary.category_breakdown == {"Food": 0.0, "Pets": 5.0}

    def test_empty(self) -> None:
        summary = calculate_summary([], REF)
        assert summary.total_spending == 0.0
        assert summary.average_expense == 0.0

    def test_amount_range(self, expenses: list[Expense]) -> None:
        assert amount_range(expenses) == (12, 250)
        assert amount_range([]) == (0, 1000)

    def test_daily_spending(self, expenses: list[Expense]) -> None:
        days = daily_spending(expenses, days=3, reference_date=REF)
        assert days == [
            (date(2025, 1, 13), 0.0),
            (date(2025, 1, 14), 15.0),
            (date(2025, 1, 15), 12.5),
        ]
