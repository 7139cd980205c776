"""Tests for calendar period helpers."""

from datetime import date

import pytest

from spendpilot.analyzers.periods import (
    date_range_from_preset,
    in_month,
    month_bounds,
    previous_month,
    round_half_up,
)
from spendpilot.models.expense import DatePreset

# A Wednesday
REF = date(2025, 1, 15)


class TestMonthHelpers:
    def test_month_bounds(self) -> None:
        assert month_bounds(date(2024, 2, 10)) == (date(2024, 2, 1), date(2024, 2, 29))
        assert month_bounds(date(2024, 12, 31)) == (date(2024, 12, 1), date(2024, 12, 31))

    def test_previous_month_wraps_year(self) -> None:
        assert previous_month(REF) == date(2024, 12, 1)
        assert previous_month(date(2025, 3, 31)) == date(2025, 2, 1)

    def test_in_month(self) -> None:
        assert in_month(date(2025, 1, 31), REF)
        assert not in_month(date(2024, 1, 15), REF)


class TestRoundHalfUp:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [(2.5, 3), (0.5, 1), (1.4, 1), (14.5, 15), (-2.5, -3)],
    )
    def test_rounding(self, value: float, expected: int) -> None:
        assert round_half_up(value) == expected


class TestDatePresets:
    def test_today_and_yesterday(self) -> None:
        assert date_range_from_preset(DatePreset.TODAY, REF) == (REF, REF)
        assert date_range_from_preset(DatePreset.YESTERDAY, REF) == (date(2025, 1, 14), date(2025, 1, 14))

    def test_weeks_start_on_sunday(self) -> None:
        assert date_range_from_preset(DatePreset.THIS_WEEK, REF) == (date(2025, 1, 12), REF)
        assert date_range_from_preset(DatePreset.LAST_WEEK, REF) == (date(2025, 1, 5), date(2025, 1, 11))

    def test_this_week_on_sunday(self) -> None:
        sunday = date(2025, 1, 12)
        assert date_range_from_preset(DatePreset.THIS_WEEK, sunday) == (sunday, sunday)

    def test_months(self) -> None:
        assert date_range_from_preset(DatePreset.THIS_MONTH, REF) == (date(2025, 1, 1), REF)
        assert date_range_from_preset(DatePreset.LAST_MONTH, REF) == (date(2024, 12, 1), date(2024, 12, 31))

    def test_trailing_days_include_today(self) -> None:
        assert date_range_from_preset(DatePreset.LAST_7_DAYS, REF) == (date(2025, 1, 9), REF)
        assert date_range_from_preset(DatePreset.LAST_30_DAYS, REF) == (date(2024, 12, 17), REF)
        assert date_range_from_preset(DatePreset.LAST_90_DAYS, REF) == (date(2024, 10, 18), REF)

    def test_years(self) -> None:
        assert date_range_from_preset(DatePreset.THIS_YEAR, REF) == (date(2025, 1, 1), REF)
        assert date_range_from_preset(DatePreset.LAST_YEAR, REF) == (date(2024, 1, 1), date(2024, 12, 31))
