"""Data models — expenses, budgets, goals and derived intelligence."""
from spendpilot.models.budget import (
    BudgetSettings,
    CategoryBudget,
    GoalPriority,
    SavingsGoal,
    default_budget_settings,
)
from spendpilot.models.expense import (
    DEFAULT_CATEGORIES,
    CustomCategory,
    DatePreset,
    Expense,
    ExpenseFilters,
    ExpenseSummary,
    validate_expense_form,
)
from spendpilot.models.intelligence import (
    Dashboard,
    FinancialHealth,
    Frequency,
    HealthFactors,
    HealthLevel,
    InsightType,
    RecurringExpense,
    SmartInsight,
)

__all__ = [
    "DEFAULT_CATEGORIES",
    "BudgetSettings",
    "CategoryBudget",
    "CustomCategory",
    "Dashboard",
    "DatePreset",
    "Expense",
    "ExpenseFilters",
    "ExpenseSummary",
    "FinancialHealth",
    "Frequency",
    "GoalPriority",
    "HealthFactors",
    "HealthLevel",
    "InsightType",
    "RecurringExpense",
    "SavingsGoal",
    "SmartInsight",
    "default_budget_settings",
    "validate_expense_form",
]
