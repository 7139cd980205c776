"""Tests for the CSV, JSON, HTML and Markdown exporters."""

import json
from datetime import date, datetime
from pathlib import Path

import pytest

from spendpilot.exporters import (
    export_to_csv,
    export_to_json,
    render_html,
    render_markdown,
    select_for_export,
)
from spendpilot.importers import CSVImporter
from spendpilot.models.expense import Expense
from spendpilot.tracker import ExpenseTracker

NOW = datetime(2025, 1, 15, 10, 30)


@pytest.fixture
def expenses() -> list[Expense]:
    return [
        Expense(
            id="e1",
            date=date(2025, 1, 3),
            amount=12.5,
            category="Food",
            description='Lunch at "Joe\'s"',
            created_at=datetime(2025, 1, 3, 12, 0),
            updated_at=datetime(2025, 1, 3, 12, 0),
        ),
        Expense(
            id="e2",
            date=date(2025, 1, 10),
            amount=60.0,
            category="Transportation",
            description="Gas, full tank",
            created_at=datetime(2025, 1, 10, 18, 0),
            updated_at=datetime(2025, 1, 10, 18, 0),
        ),
        Expense(
            id="e3",
            date=date(2024, 12, 20),
            amount=250.0,
            category="Shopping",
            description="<b>Jacket</b>",
            created_at=datetime(2024, 12, 20, 9, 0),
            updated_at=datetime(2024, 12, 20, 9, 0),
        ),
    ]


class TestSelectForExport:
    def test_newest_first(self, expenses: list[Expense]) -> None:
        assert [e.id for e in select_for_export(expenses)] == ["e2", "e1", "e3"]

    def test_date_range_and_categories(self, expenses: list[Expense]) -> None:
        selected = select_for_export(
            expenses,
            start_date=date(2025, 1, 1),
            end_date=date(2025, 1, 10),
            categories=["Food"],
        )
        assert [e.id for e in selected] == ["e1"]


class TestCSVExport:
    def test_headers_and_rows(self, expenses: list[Expense]) -> None:
        lines = export_to_csv(expenses[:2]).split("\n")

        assert lines[0] == "Date,Category,Amount,Description,Created At"
        assert lines[1] == '2025-01-03,Food,12.50,"Lunch at ""Joe\'s""",2025-01-03'
        assert lines[2] == '2025-01-10,Transportation,60.00,"Gas, full tank",2025-01-10'

    def test_without_headers(self, expenses: list[Expense]) -> None:
        assert export_to_csv(expenses[:1], include_headers=False).startswith("2025-01-03,")

    def test_empty(self) -> None:
        assert export_to_csv([]) == "Date,Category,Amount,Description,Created At"

    def test_plain_fields_unquoted(self, expenses: list[Expense]) -> None:
        lines = export_to_csv([expenses[2]]).split("\n")
        assert lines[1] == "2024-12-20,Shopping,250.00,<b>Jacket</b>,2024-12-20"

    def test_category_with_comma_reimports(self, tmp_path: Path) -> None:
        expense = Expense(
            id="e4",
            date=date(2025, 1, 5),
            amount=12.5,
            category="Food, Drink",
            description="Lunch",
            created_at=datetime(2025, 1, 5, 12, 0),
            updated_at=datetime(2025, 1, 5, 12, 0),
        )
        text = export_to_csv([expense])
        assert text.split("\n")[1] == '2025-01-05,"Food, Drink",12.50,Lunch,2025-01-05'

        file = tmp_path / "export.csv"
        file.write_text(text)
        rows = CSVImporter(file).read(known_categories=["Food, Drink", "Other"])

        assert len(rows) == 1
        assert rows[0].category == "Food, Drink"
        assert rows[0].amount == 12.5
        assert rows[0].description == "Lunch"


class TestJSONExport:
    def test_payload(self, expenses: list[Expense]) -> None:
        payload = json.loads(export_to_json(expenses, now=NOW))

        assert payload["exportDate"] == "2025-01-15T10:30:00"
        assert payload["totalExpenses"] == 3
        assert payload["totalAmount"] == pytest.approx(322.5)
        assert payload["expenses"][0] == {
            "date": "2025-01-03",
            "category": "Food",
            "amount": 12.5,
            "description": 'Lunch at "Joe\'s"',
            "createdAt": "2025-01-03T12:00:00",
        }

    def test_compact(self, expenses: list[Expense]) -> None:
        assert "\n" not in export_to_json(expenses, pretty=False, now=NOW)


class TestHTMLExport:
    def test_report_structure(self, expenses: list[Expense]) -> None:
        html = render_html(expenses, now=NOW)

        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Expense Report</title>" in html
        assert "Generated on Wednesday, January 15, 2025" in html
        assert "$322.50" in html
        assert "SpendPilot - Intelligent Expense Tracking" in html

    def test_escapes_user_text(self, expenses: list[Expense]) -> None:
        html = render_html(expenses, now=NOW)
        assert "<b>Jacket</b>" not in html
        assert "&lt;b&gt;Jacket&lt;/b&gt;" in html

    def test_category_breakdown_sorted_by_amount(self, expenses: list[Expense]) -> None:
        html = render_html(expenses, now=NOW)
        breakdown = html.split("Category Breakdown")[1].split("All Transactions")[0]
        assert breakdown.index("Shopping") < breakdown.index("Transportation") < breakdown.index("Food")


class TestMarkdownExport:
    def test_dashboard_report(self) -> None:
        tracker = ExpenseTracker.from_config(storage={"backend": "memory"})
        tracker.set_budget("Food", 100)
        tracker.add_expense(date=date(2024, 12, 10), amount=40, category="Food", description="Groceries")
        tracker.add_expense(date=date(2025, 1, 5), amount=120, category="Food", description="Groceries")

        md = render_markdown(tracker.dashboard(date(2025, 1, 15), now=NOW))

        assert md.startswith("# 💸 SpendPilot Report — January 2025")
        assert "*Generated: 2025-01-15 10:30*" in md
        assert "## 📊 Summary" in md
        assert "| Food | $100.00 | $120.00 | $-20.00 | 120% |" in md
        assert "**Food Budget Exceeded!**" in md
        assert "## 🔁 Recurring Expenses" in md
        assert "## ❤️ Financial Health" in md
        assert "**Recommendations:**" in md
