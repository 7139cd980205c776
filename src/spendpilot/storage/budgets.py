"""
Budget settings and savings goal store.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import date, datetime

from pydantic import ValidationError

from spendpilot.errors import GoalNotFoundError
from spendpilot.models.budget import (
    BudgetSettings,
    GoalPriority,
    SavingsGoal,
    default_budget_settings,
)
from spendpilot.storage.base import BUDGETS_KEY, GOALS_KEY, KeyValueStore
from spendpilot.storage.expenses import generate_id

logger = logging.getLogger("spendpilot.storage.budgets")


class BudgetStore:
    """Persist monthly category limits and savings goals."""

    def __init__(
        self,
        store: KeyValueStore,
        categories: Iterable[str] | None = None,
        currency: str = "USD",
    ) -> None:
        self.store = store
        self.categories = list(categories) if categories is not None else None
        self.currency = currency

    # ------------------------------------------------------------------ #
    #  Budget settings                                                     #
    # ------------------------------------------------------------------ #

    def get_settings(self) -> BudgetSettings:
        """Stored settings, or a fresh zero-limit map when none are saved."""
        raw = self.store.get_json(BUDGETS_KEY)
        if raw is not None:
            try:
                return BudgetSettings.model_validate(raw)
            except ValidationError as e:
                logger.warning("Ignoring invalid budget settings: %s", e)
        return default_budget_settings(self.categories, currency=self.currency)

    def save_settings(self, settings: BudgetSettings) -> None:
        self.store.set_json(BUDGETS_KEY, settings.model_dump(mode="json"))

    def set_limit(self, category: str, amount: float) -> BudgetSettings:
        if amount < 0:
            raise ValueError("Budget limit cannot be negative")
        settings = self.get_settings()
        settings.budgets[category] = amount
        self.save_settings(settings)
        logger.info("Set %s budget to $%.2f", category, amount)
        return settings

    # ------------------------------------------------------------------ #
    #  Savings goals                                                       #
    # ------------------------------------------------------------------ #

    def get_goals(self) -> list[SavingsGoal]:
        goals: list[SavingsGoal] = []
        for raw in self.store.get_json(GOALS_KEY, default=[]) or []:
            try:
                goals.append(SavingsGoal.model_validate(raw))
            except ValidationError as e:
                logger.warning("Skipping invalid savings goal: %s", e)
        return goals

    def save_goals(self, goals: list[SavingsGoal]) -> None:
        self.store.set_json(GOALS_KEY, [g.model_dump(mode="json", by_alias=True) for g in goals])

    def create_goal(
        self,
        *,
        name: str,
        target_amount: float,
        deadline: date,
        current_amount: float = 0.0,
        category: str | None = None,
        priority: GoalPriority = GoalPriority.MEDIUM,
        now: datetime | None = None,
    ) -> SavingsGoal:
        stamp = now or datetime.now()
        goal = SavingsGoal(
            id=generate_id(),
            name=name,
            target_amount=target_amount,
            current_amount=current_amount,
            deadline=deadline,
            category=category,
            priority=priority,
            created_at=stamp,
            updated_at=stamp,
        )
        self.add_goal(goal)
        return goal

    def add_goal(self, goal: SavingsGoal) -> None:
        goals = self.get_goals()
        goals.append(goal)
        self.save_goals(goals)
        logger.info("Added savings goal %r", goal.name)

    def update_goal(self, goal_id: str, updated: SavingsGoal, now: datetime | None = None) -> SavingsGoal:
        goals = self.get_goals()
        for index, existing in enumerate(goals):
            if existing.id == goal_id:
                record = updated.model_copy(
                    update={
                        "id": goal_id,
                        "created_at": existing.created_at,
                        "updated_at": now or datetime.now(),
                    }
                )
                goals[index] = record
                self.save_goals(goals)
                return record
        raise GoalNotFoundError(goal_id)

    def update_progress(self, goal_id: str, current_amount: float, now: datetime | None = None) -> SavingsGoal:
        """Set how much has been saved towards a goal so far."""
        for goal in self.get_goals():
            if goal.id == goal_id:
                updated = goal.model_copy(update={"current_amount": max(0.0, current_amount)})
                return self.update_goal(goal_id, updated, now=now)
        raise GoalNotFoundError(goal_id)

    def delete_goal(self, goal_id: str) -> None:
        goals = self.get_goals()
        remaining = [g for g in goals if g.id != goal_id]
        if len(remaining) == len(goals):
            raise GoalNotFoundError(goal_id)
        self.save_goals(remaining)
        logger.info("Deleted savings goal %s", goal_id)
