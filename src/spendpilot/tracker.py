"""
SpendPilot — Main orchestrator.

The ExpenseTracker class is the top-level entry point that ties the
stores (expenses, budgets, goals, categories) to the intelligence
analyzers. Every read recomputes from the full expense list; nothing
derived is cached.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from pathlib import Path
from typing import Any

from spendpilot.analyzers.budget import compute_budgets
from spendpilot.analyzers.health import score_health
from spendpilot.analyzers.insights import generate_insights
from spendpilot.analyzers.recurring import detect_recurring
from spendpilot.analyzers.summary import calculate_summary, filter_expenses
from spendpilot.config import SpendPilotConfig
from spendpilot.errors import UnknownCategoryError
from spendpilot.importers import CSVImporter
from spendpilot.models.budget import CategoryBudget
from spendpilot.models.expense import Expense, ExpenseFilters, ExpenseSummary
from spendpilot.models.intelligence import (
    Dashboard,
    FinancialHealth,
    RecurringExpense,
    SmartInsight,
)
from spendpilot.storage import (
    BudgetStore,
    CategoryRegistry,
    ExpenseStore,
    JSONFileStore,
    KeyValueStore,
    MemoryStore,
)
from spendpilot.storage.expenses import generate_id

logger = logging.getLogger("spendpilot")


def _build_store(config: SpendPilotConfig) -> KeyValueStore:
    if config.storage.backend == "memory":
        return MemoryStore()
    return JSONFileStore(config.storage.data_dir)


@dataclass
class ExpenseTracker:
    """Top-level facade for SpendPilot.

    Usage::

        from spendpilot import ExpenseTracker

        tracker = ExpenseTracker.from_config("spendpilot.yaml")
        tracker.add_expense(date=date.today(), amount=12.5, category="Food",
                            description="Lunch")
        dashboard = tracker.dashboard()
        print(dashboard.health.score)
    """

    config: SpendPilotConfig = field(default_factory=SpendPilotConfig)
    store: KeyValueStore | None = None
    expenses_store: ExpenseStore = field(init=False, repr=False)
    budget_store: BudgetStore = field(init=False, repr=False)
    categories: CategoryRegistry = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if self.store is None:
            self.store = _build_store(self.config)
        self.expenses_store = ExpenseStore(self.store)
        self.budget_store = BudgetStore(
            self.store,
            categories=self.config.default_categories,
            currency=self.config.currency,
        )
        self.categories = CategoryRegistry(self.store)
        logger.debug("ExpenseTracker ready with %s backend", self.store.name)

    @classmethod
    def from_config(cls, config_path: str | None = None, **overrides: Any) -> ExpenseTracker:
        """Create a tracker from a config file or keyword arguments."""
        return cls(config=SpendPilotConfig.load(config_path, **overrides))

    # ------------------------------------------------------------------ #
    #  Expenses                                                            #
    # ------------------------------------------------------------------ #

    def _check_category(self, category: str) -> str:
        known = self.categories.get_by_name(category)
        if known is None:
            raise UnknownCategoryError(f"Unknown category: {category}")
        return known.name

    def add_expense(
        self,
        *,
        date: date,
        amount: float,
        category: str,
        description: str,
        now: datetime | None = None,
    ) -> Expense:
        return self.expenses_store.create(
            date=date,
            amount=amount,
            category=self._check_category(category),
            description=description,
            now=now,
        )

    def update_expense(self, expense_id: str, now: datetime | None = None, **changes: Any) -> Expense:
        """Replace fields of an existing expense and re-validate it."""
        current = self.expenses_store.get(expense_id)
        if "category" in changes:
            changes["category"] = self._check_category(changes["category"])
        data = current.model_dump()
        data.update(changes)
        return self.expenses_store.update(expense_id, Expense.model_validate(data), now=now)

    def delete_expense(self, expense_id: str) -> None:
        self.expenses_store.delete(expense_id)

    def import_csv(self, file_path: str | Path, now: datetime | None = None) -> list[Expense]:
        """Add every usable row of a CSV file; unknown categories map to Other."""
        rows = CSVImporter(file_path).read(known_categories=self.categories.names())
        stamp = now or datetime.now()
        expenses = self.expenses_store.get_all()
        added = [
            Expense(
                id=generate_id(),
                date=row.date,
                amount=row.amount,
                category=row.category,
                description=row.description,
                created_at=stamp,
                updated_at=stamp,
            )
            for row in rows
        ]
        self.expenses_store.save_all(expenses + added)
        logger.info("Imported %d expenses from %s", len(added), file_path)
        return added

    def expenses(
        self,
        filters: ExpenseFilters | None = None,
        reference_date: date | None = None,
    ) -> list[Expense]:
        expenses = self.expenses_store.get_all()
        if filters is None:
            return expenses
        return filter_expenses(expenses, filters, reference_date)

    # ------------------------------------------------------------------ #
    #  Intelligence                                                        #
    # ------------------------------------------------------------------ #

    def set_budget(self, category: str, amount: float) -> None:
        self.budget_store.set_limit(self._check_category(category), amount)

    def category_names(self) -> list[str]:
        """Registry categories, then any budgeted category not in the registry."""
        names = self.categories.names()
        names.extend(self.budget_store.get_settings().budgets)
        return list(dict.fromkeys(names))

    def budgets(self, reference_date: date | None = None) -> list[CategoryBudget]:
        return compute_budgets(
            self.expenses_store.get_all(),
            self.budget_store.get_settings(),
            reference_date,
            categories=self.category_names(),
        )

    def recurring(self) -> list[RecurringExpense]:
        return detect_recurring(self.expenses_store.get_all())

    def insights(
        self,
        reference_date: date | None = None,
        now: datetime | None = None,
    ) -> list[SmartInsight]:
        expenses = self.expenses_store.get_all()
        return generate_insights(
            expenses,
            self.budgets(reference_date),
            detect_recurring(expenses),
            reference_date,
            now=now,
        )

    def health(self, reference_date: date | None = None) -> FinancialHealth:
        return score_health(
            self.expenses_store.get_all(),
            self.budgets(reference_date),
            self.budget_store.get_goals(),
            reference_date,
        )

    def summary(self, reference_date: date | None = None) -> ExpenseSummary:
        return calculate_summary(self.expenses_store.get_all(), reference_date, self.category_names())

    def dashboard(
        self,
        reference_date: date | None = None,
        now: datetime | None = None,
    ) -> Dashboard:
        """Run every analyzer once over the current expense list."""
        ref = reference_date or date.today()
        stamp = now or datetime.now()
        expenses = self.expenses_store.get_all()
        settings = self.budget_store.get_settings()
        categories = self.category_names()

        budgets = compute_budgets(expenses, settings, ref, categories=categories)
        recurring = detect_recurring(expenses)
        dashboard = Dashboard(
            reference_date=ref,
            generated_at=stamp,
            currency=settings.currency,
            summary=calculate_summary(expenses, ref, categories),
            budgets=budgets,
            recurring=recurring,
            insights=generate_insights(expenses, budgets, recurring, ref, now=stamp),
            health=score_health(expenses, budgets, self.budget_store.get_goals(), ref),
        )
        logger.info(
            "Dashboard for %s: %d expenses, %d insights, health %d",
            ref.isoformat(),
            dashboard.summary.expense_count,
            len(dashboard.insights),
            dashboard.health.score,
        )
        return dashboard
