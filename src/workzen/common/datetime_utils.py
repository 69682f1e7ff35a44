from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def month_bounds(year: int, month: int) -> tuple[date, date]:
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, 1), date(year, month, last_day)


def count_weekdays(start: date, end: date) -> int:
    """Number of Monday-Friday days in [start, end], both ends included."""

    if start > end:
        return 0

    total_days = (end - start).days + 1
    full_weeks, remainder = divmod(total_days, 7)
    count = full_weeks * 5

    day = start + timedelta(days=full_weeks * 7)
    for _ in range(remainder):
        if day.weekday() < 5:
            count += 1
        day += timedelta(days=1)
    return count


def working_days_in_month(year: int, month: int) -> int:
    """Weekdays in the month. Saturdays and Sundays never count; no holiday calendar."""

    first, last = month_bounds(year, month)
    return count_weekdays(first, last)


def clip_range(start: date, end: date, lower: date, upper: date) -> tuple[date, date]:
    return max(start, lower), min(end, upper)


def trailing_months(year: int, month: int, count: int) -> list[tuple[int, int]]:
    """`count` (year, month) pairs ending with the given month, oldest first."""

    out: list[tuple[int, int]] = []
    y, m = year, month
    for _ in range(count):
        out.append((y, m))
        m -= 1
        if m == 0:
            m = 12
            y -= 1
    out.reverse()
    return out
