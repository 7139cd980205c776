"""
Recurring Expense Detector — interval statistics over repeated descriptions.

Expenses are grouped by normalized description. For every group with at
least two occurrences the gaps between consecutive dates are measured:
1. **Average interval** decides the frequency (daily / weekly / monthly).
2. **Coefficient of variation** of the gaps gives a confidence score:
   the more regular the gaps, the higher the confidence.

Groups scoring above the confidence threshold are reported, most
confident first. No LLM or external data involved.
"""

from __future__ import annotations

import logging
import statistics
from dataclasses import dataclass
from datetime import timedelta

from spendpilot.analyzers.periods import round_half_up
from spendpilot.models.expense import Expense
from spendpilot.models.intelligence import Frequency, RecurringExpense

logger = logging.getLogger("spendpilot.analyzers.recurring")


@dataclass
class IntervalStats:
    """Gap statistics for one description group."""

    intervals: list[float]
    average: float
    std_dev: float

    @property
    def coefficient_of_variation(self) -> float:
        return self.std_dev / self.average * 100

    @property
    def confidence(self) -> float:
        # All occurrences on the same day give no usable interval.
        if self.average == 0:
            return 0.0
        return max(0.0, min(100.0, 100 - self.coefficient_of_variation))


class RecurringDetector:
    """Detect recurring expenses from the full expense history."""

    MIN_OCCURRENCES = 2
    MIN_CONFIDENCE = 40.0
    DAILY_MAX_INTERVAL = 3.0
    WEEKLY_MAX_INTERVAL = 10.0

    @classmethod
    def analyze(cls, expenses: list[Expense]) -> list[RecurringExpense]:
        """Return recurring expenses sorted by confidence, highest first.

        Ties keep the order in which each description first appeared.
        """
        groups = cls._group_by_description(expenses)
        recurring: list[RecurringExpense] = []

        for key, members in groups.items():
            if len(members) < cls.MIN_OCCURRENCES:
                continue

            ordered = sorted(members, key=lambda e: e.date)
            stats = cls._interval_stats(ordered)
            confidence = stats.confidence
            if confidence <= cls.MIN_CONFIDENCE:
                logger.debug("Skipping %r: confidence %.1f too low", key, confidence)
                continue

            first = members[0]
            last_date = ordered[-1].date
            recurring.append(
                RecurringExpense(
                    description=first.description,
                    category=first.category,
                    average_amount=sum(e.amount for e in members) / len(members),
                    frequency=cls._classify(stats.average),
                    occurrences=len(members),
                    confidence=round_half_up(confidence),
                    last_occurrence=last_date,
                    next_expected=last_date + timedelta(days=round_half_up(stats.average)),
                )
            )

        recurring.sort(key=lambda r: r.confidence, reverse=True)
        logger.debug(
            "Detected %d recurring expenses across %d description groups",
            len(recurring),
            len(groups),
        )
        return recurring

    # ------------------------------------------------------------------ #
    #  Helpers                                                             #
    # ------------------------------------------------------------------ #

    @staticmethod
    def _group_by_description(expenses: list[Expense]) -> dict[str, list[Expense]]:
        groups: dict[str, list[Expense]] = {}
        for exp in expenses:
            groups.setdefault(exp.normalized_description, []).append(exp)
        return groups

    @staticmethod
    def _interval_stats(ordered: list[Expense]) -> IntervalStats:
        intervals = [
            float((ordered[i].date - ordered[i - 1].date).days)
            for i in range(1, len(ordered))
        ]
        return IntervalStats(
            intervals=intervals,
            average=statistics.fmean(intervals),
            std_dev=statistics.pstdev(intervals),
        )

    @classmethod
    def _classify(cls, average_interval: float) -> Frequency:
        if average_interval <= cls.DAILY_MAX_INTERVAL:
            return Frequency.DAILY
        if average_interval <= cls.WEEKLY_MAX_INTERVAL:
            return Frequency.WEEKLY
        return Frequency.MONTHLY


def detect_recurring(expenses: list[Expense]) -> list[RecurringExpense]:
    """Quick recurring-expense detection."""
    return RecurringDetector.analyze(expenses)
