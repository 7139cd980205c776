"""
Expense store — CRUD over the persisted expense list.
"""

from __future__ import annotations

import logging
import uuid
from datetime import date, datetime

from pydantic import ValidationError

from spendpilot.errors import ExpenseNotFoundError
from spendpilot.models.expense import Expense
from spendpilot.storage.base import EXPENSES_KEY, KeyValueStore

logger = logging.getLogger("spendpilot.storage.expenses")


def generate_id() -> str:
    return uuid.uuid4().hex


class ExpenseStore:
    """Read and write expenses as one JSON array under a fixed key.

    Every mutation reads the full list, changes it, and writes it back.
    """

    def __init__(self, store: KeyValueStore) -> None:
        self.store = store

    def get_all(self) -> list[Expense]:
        expenses: list[Expense] = []
        for raw in self.store.get_json(EXPENSES_KEY, default=[]) or []:
            try:
                expenses.append(Expense.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping invalid expense record: %s", e)
        return expenses

    def save_all(self, expenses: list[Expense]) -> None:
        self.store.set_json(EXPENSES_KEY, [e.to_storage() for e in expenses])

    def get(self, expense_id: str) -> Expense:
        for exp in self.get_all():
            if exp.id == expense_id:
                return exp
        raise ExpenseNotFoundError(expense_id)

    def create(
        self,
        *,
        date: date,
        amount: float,
        category: str,
        description: str,
        now: datetime | None = None,
    ) -> Expense:
        """Build, validate and persist a new expense with a fresh id."""
        stamp = now or datetime.now()
        expense = Expense(
            id=generate_id(),
            date=date,
            amount=amount,
            category=category,
            description=description,
            created_at=stamp,
            updated_at=stamp,
        )
        self.add(expense)
        return expense

    def add(self, expense: Expense) -> None:
        expenses = self.get_all()
        expenses.append(expense)
        self.save_all(expenses)
        logger.info("Added expense %s (%s $%.2f)", expense.id, expense.category, expense.amount)

    def update(self, expense_id: str, updated: Expense, now: datetime | None = None) -> Expense:
        """Replace a whole record, keeping its id and creation time."""
        expenses = self.get_all()
        for index, existing in enumerate(expenses):
            if existing.id == expense_id:
                record = updated.model_copy(
                    update={
                        "id": expense_id,
                        "created_at": existing.created_at,
                        "updated_at": now or datetime.now(),
                    }
                )
                expenses[index] = record
                self.save_all(expenses)
                logger.info("Updated expense %s", expense_id)
                return record
        raise ExpenseNotFoundError(expense_id)

    def delete(self, expense_id: str) -> None:
        expenses = self.get_all()
        remaining = [e for e in expenses if e.id != expense_id]
        if len(remaining) == len(expenses):
            raise ExpenseNotFoundError(expense_id)
        self.save_all(remaining)
        logger.info("Deleted expense %s", expense_id)

    def clear(self) -> None:
        self.store.remove(EXPENSES_KEY)
        logger.info("Cleared all expenses")
