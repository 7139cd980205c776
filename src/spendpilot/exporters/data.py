"""
CSV and JSON exporters for raw expense data.
"""

from __future__ import annotations

import json
from collections.abc import Iterable
from datetime import date, datetime

import pandas as pd

from spendpilot.models.expense import Expense

CSV_HEADERS = ["Date", "Category", "Amount", "Description", "Created At"]


def select_for_export(
    expenses: list[Expense],
    start_date: date | None = None,
    end_date: date | None = None,
    categories: Iterable[str] | None = None,
) -> list[Expense]:
    """Filter by inclusive date range and categories, newest first."""
    wanted = set(categories or [])
    selected = [
        e
        for e in expenses
        if (start_date is None or e.date >= start_date)
        and (end_date is None or e.date <= end_date)
        and (not wanted or e.category in wanted)
    ]
    return sorted(selected, key=lambda e: e.date, reverse=True)


def export_to_csv(expenses: list[Expense], include_headers: bool = True) -> str:
    """Render expenses as CSV text, quoting only the fields that need it."""
    frame = pd.DataFrame(
        [
            [
                exp.date.isoformat(),
                exp.category,
                f"{exp.amount:.2f}",
                exp.description,
                exp.created_at.date().isoformat(),
            ]
            for exp in expenses
        ],
        columns=CSV_HEADERS,
    )
    text = frame.to_csv(index=False, header=include_headers, lineterminator="\n")
    return text.rstrip("\n")


def export_to_json(
    expenses: list[Expense],
    pretty: bool = True,
    now: datetime | None = None,
) -> str:
    """Render expenses as a JSON document with export metadata."""
    payload = {
        "exportDate": (now or datetime.now()).isoformat(),
        "totalExpenses": len(expenses),
        "totalAmount": sum(e.amount for e in expenses),
        "expenses": [
            {
                "date": e.date.isoformat(),
                "category": e.category,
                "amount": e.amount,
                "description": e.description,
                "createdAt": e.created_at.isoformat(),
            }
            for e in expenses
        ],
    }
    return json.dumps(payload, indent=2 if pretty else None, ensure_ascii=False)
