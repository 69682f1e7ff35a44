from __future__ import annotations

import calendar
from datetime import date

import pytest

from workzen.common.datetime_utils import (
    clip_range,
    count_weekdays,
    month_bounds,
    trailing_months,
    working_days_in_month,
)


@pytest.mark.parametrize(
    "year, month, expected",
    [
        (2025, 1, 23),
        (2025, 2, 20),
        (2024, 2, 21),
        (2026, 10, 22),
        (2025, 11, 20),
    ],
)
def test_working_days_in_month_known_values(year, month, expected):
    assert working_days_in_month(year, month) == expected


def test_working_days_match_calendar_for_every_month():
    for year in (2023, 2024, 2025, 2026):
        for month in range(1, 13):
            days = calendar.monthrange(year, month)[1]
            expected = sum(1 for d in range(1, days + 1) if date(year, month, d).weekday() < 5)
            assert working_days_in_month(year, month) == expected, (year, month)


def test_count_weekdays_skips_weekends_and_includes_both_ends():
    # Sat 4 Jan 2025 .. Sun 5 Jan 2025
    assert count_weekdays(date(2025, 1, 4), date(2025, 1, 5)) == 0
    # Fri .. Mon
    assert count_weekdays(date(2025, 1, 3), date(2025, 1, 6)) == 2
    assert count_weekdays(date(2025, 1, 6), date(2025, 1, 6)) == 1


def test_count_weekdays_empty_when_start_after_end():
    assert count_weekdays(date(2025, 1, 10), date(2025, 1, 9)) == 0


def test_month_bounds_handles_leap_year():
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 2, 29))


def test_clip_range_keeps_only_the_month_part():
    first, last = month_bounds(2025, 1)
    assert clip_range(date(2025, 1, 28), date(2025, 2, 6), first, last) == (date(2025, 1, 28), date(2025, 1, 31))


def test_trailing_months_crosses_year_boundary_oldest_first():
    assert trailing_months(2025, 2, 3) == [(2024, 12), (2025, 1), (2025, 2)]
    assert len(trailing_months(2025, 6, 6)) == 6
