"""
Calendar period helpers shared by the analyzers.

All month arithmetic is done on plain ``date`` objects; callers pass the
reference date explicitly so results never depend on the wall clock.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, timedelta

from spendpilot.models.expense import DatePreset, Expense


def month_bounds(ref: date) -> tuple[date, date]:
    """First and last day of the month containing ``ref``."""
    start = ref.replace(day=1)
    if ref.month == 12:
        end = ref.replace(year=ref.year + 1, month=1, day=1) - timedelta(days=1)
    else:
        end = ref.replace(month=ref.month + 1, day=1) - timedelta(days=1)
    return start, end


def previous_month(ref: date) -> date:
    """First day of the calendar month before ``ref``."""
    return (ref.replace(day=1) - timedelta(days=1)).replace(day=1)


def in_month(d: date, ref: date) -> bool:
    return d.year == ref.year and d.month == ref.month


def expenses_in_month(expenses: Iterable[Expense], ref: date) -> list[Expense]:
    return [e for e in expenses if in_month(e.date, ref)]


def month_total(expenses: Iterable[Expense], ref: date) -> float:
    return sum(e.amount for e in expenses if in_month(e.date, ref))


def round_half_up(value: float) -> int:
    """Round to the nearest integer, .5 going up (``round`` would go to even)."""
    return int(value + 0.5) if value >= 0 else -int(-value + 0.5)


def date_range_from_preset(
    preset: DatePreset,
    reference_date: date | None = None,
) -> tuple[date, date]:
    """Resolve a named preset into an inclusive ``(start, end)`` range.

    Weeks start on Sunday and the "last N days" presets include today.
    """
    today = reference_date or date.today()
    end = today
    # date.weekday() is Monday=0; shift so Sunday=0
    days_since_sunday = (today.weekday() + 1) % 7

    if preset == DatePreset.YESTERDAY:
        start = end = today - timedelta(days=1)
    elif preset == DatePreset.THIS_WEEK:
        start = today - timedelta(days=days_since_sunday)
    elif preset == DatePreset.LAST_WEEK:
        start = today - timedelta(days=days_since_sunday + 7)
        end = start + timedelta(days=6)
    elif preset == DatePreset.THIS_MONTH:
        start = today.replace(day=1)
    elif preset == DatePreset.LAST_MONTH:
        start = previous_month(today)
        end = today.replace(day=1) - timedelta(days=1)
    elif preset == DatePreset.LAST_7_DAYS:
        start = today - timedelta(days=6)
    elif preset == DatePreset.LAST_30_DAYS:
        start = today - timedelta(days=29)
    elif preset == DatePreset.LAST_90_DAYS:
        start = today - timedelta(days=89)
    elif preset == DatePreset.THIS_YEAR:
        start = date(today.year, 1, 1)
    elif preset == DatePreset.LAST_YEAR:
        start = date(today.year - 1, 1, 1)
        end = date(today.year - 1, 12, 31)
    else:
        # today, custom
        start = today

    return start, end
