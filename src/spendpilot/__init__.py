"""
SpendPilot — personal expense tracking with built-in intelligence.

Record expenses. Set budgets. Get insights.
Budgets, recurring-expense detection and a financial health score,
all computed locally from your own data.
"""

__version__ = "0.1.0"
__all__ = ["ExpenseTracker"]

from spendpilot.tracker import ExpenseTracker  # noqa: E402
