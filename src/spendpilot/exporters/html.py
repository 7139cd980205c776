"""
HTML report exporter.

Generates a printable HTML expense report (summary cards, category
breakdown, full transaction table). Open it in a browser and print to PDF.
"""

from __future__ import annotations

import html
from datetime import datetime

from spendpilot.models.expense import Expense


def _escape(text: str) -> str:
    """HTML-escape a string."""
    return html.escape(str(text))


def _category_totals(expenses: list[Expense]) -> dict[str, tuple[int, float]]:
    """Category -> (transaction count, amount)."""
    totals: dict[str, tuple[int, float]] = {}
    for exp in expenses:
        count, amount = totals.get(exp.category, (0, 0.0))
        totals[exp.category] = (count + 1, amount + exp.amount)
    return totals


def render_html(expenses: list[Expense], now: datetime | None = None) -> str:
    """Render expenses as a print-ready HTML page."""
    generated = now or datetime.now()
    total_amount = sum(e.amount for e in expenses)
    totals = _category_totals(expenses)
    average = total_amount / len(expenses) if expenses else 0.0

    category_rows = "".join(
        f"""
            <tr>
                <td><span class="category-badge">{_escape(category)}</span></td>
                <td>{count}</td>
                <td class="amount">${amount:,.2f}</td>
                <td class="amount">{(amount / total_amount * 100) if total_amount else 0:.1f}%</td>
            </tr>"""
        for category, (count, amount) in sorted(totals.items(), key=lambda x: x[1][1], reverse=True)
    )

    expense_rows = "".join(
        f"""
            <tr>
                <td>{exp.date.strftime("%b %d, %Y")}</td>
                <td><span class="category-badge">{_escape(exp.category)}</span></td>
                <td>{_escape(exp.description)}</td>
                <td class="amount">${exp.amount:,.2f}</td>
            </tr>"""
        for exp in expenses
    )

    return f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <title>Expense Report</title>
    <style>
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', Roboto, sans-serif;
            padding: 40px;
            color: #1f2937;
        }}
        .header {{
            text-align: center;
            margin-bottom: 30px;
            padding-bottom: 20px;
            border-bottom: 2px solid #e5e7eb;
        }}
        .header h1 {{ font-size: 28px; margin-bottom: 8px; }}
        .header p {{ color: #6b7280; font-size: 14px; }}
        .summary {{
            display: flex;
            justify-content: space-between;
            margin-bottom: 30px;
            padding: 20px;
            background: #f9fafb;
            border-radius: 8px;
        }}
        .summary-item {{ text-align: center; }}
        .summary-item .label {{ font-size: 12px; color: #6b7280; text-transform: uppercase; }}
        .summary-item .value {{ font-size: 24px; font-weight: bold; }}
        .section-title {{ font-size: 18px; font-weight: 600; margin: 24px 0 16px; color: #374151; }}
        table {{ width: 100%; border-collapse: collapse; margin-bottom: 24px; }}
        th {{
            background: #f3f4f6;
            padding: 12px;
            text-align: left;
            font-size: 12px;
            text-transform: uppercase;
            color: #6b7280;
            border-bottom: 2px solid #e5e7eb;
        }}
        td {{ padding: 12px; border-bottom: 1px solid #e5e7eb; font-size: 14px; }}
        .amount {{ text-align: right; font-weight: 500; }}
        .category-badge {{
            display: inline-block;
            padding: 4px 8px;
            border-radius: 4px;
            font-size: 12px;
            background: #e5e7eb;
        }}
        .footer {{
            margin-top: 40px;
            padding-top: 20px;
            border-top: 1px solid #e5e7eb;
            text-align: center;
            font-size: 12px;
            color: #9ca3af;
        }}
        @media print {{ body {{ padding: 20px; }} }}
    </style>
</head>
<body>
    <div class="header">
        <h1>Expense Report</h1>
        <p>Generated on {generated.strftime("%A, %B %d, %Y")}</p>
    </div>

    <div class="summary">
        <div class="summary-item"><div class="label">Total Expenses</div><div class="value">{len(expenses)}</div></div>
        <div class="summary-item"><div class="label">Total Amount</div><div class="value">${total_amount:,.2f}</div></div>
        <div class="summary-item"><div class="label">Categories</div><div class="value">{len(totals)}</div></div>
        <div class="summary-item"><div class="label">Avg per Expense</div><div class="value">${average:,.2f}</div></div>
    </div>

    <div class="section-title">Category Breakdown</div>
    <table>
        <thead>
            <tr><th>Category</th><th>Transactions</th><th style="text-align: right">Amount</th><th style="text-align: right">% of Total</th></tr>
        </thead>
        <tbody>{category_rows}
        </tbody>
    </table>

    <div class="section-title">All Transactions</div>
    <table>
        <thead>
            <tr><th>Date</th><th>Category</th><th>Description</th><th style="text-align: right">Amount</th></tr>
        </thead>
        <tbody>{expense_rows}
        </tbody>
    </table>

    <div class="footer"><p>SpendPilot - Intelligent Expense Tracking</p></div>
</body>
</html>"""
