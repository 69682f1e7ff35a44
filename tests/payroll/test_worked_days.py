from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from workzen.core.enums import AttendanceStatus, LeaveStatus, LeaveType
from workzen.payroll.worked_days import WorkedDaysCalculator, employer_cost_for, prorated_cost


def weekdays(start: date, end: date) -> list[date]:
    out = []
    day = start
    while day <= end:
        if day.weekday() < 5:
            out.append(day)
        day += timedelta(days=1)
    return out


@pytest.fixture
def calc(repos):
    return WorkedDaysCalculator(repos.attendance, repos.leaves)


def test_leave_across_month_boundary_credits_each_month_with_its_own_weekdays(repos, calc):
    repos.leaves.add(1, date(2025, 1, 28), date(2025, 2, 6))

    assert calc.paid_leave_days(1, year=2025, month=1) == 4
    assert calc.paid_leave_days(1, year=2025, month=2) == 4
    assert calc.paid_leave_days(1, year=2025, month=3) == 0


def test_weekend_only_leave_counts_nothing(repos, calc):
    repos.leaves.add(1, date(2025, 1, 4), date(2025, 1, 5))
    assert calc.paid_leave_days(1, year=2025, month=1) == 0


@pytest.mark.parametrize(
    "leave_type, status",
    [
        (LeaveType.SICK_TIME_OFF, LeaveStatus.APPROVED),
        (LeaveType.UNPAID, LeaveStatus.APPROVED),
        (LeaveType.PAID_TIME_OFF, LeaveStatus.PENDING),
        (LeaveType.PAID_TIME_OFF, LeaveStatus.REJECTED),
    ],
)
def test_only_approved_paid_time_off_counts(repos, calc, leave_type, status):
    repos.leaves.add(1, date(2025, 1, 6), date(2025, 1, 10), leave_type=leave_type, status=status)
    assert calc.paid_leave_days(1, year=2025, month=1) == 0


def test_only_present_attendance_counts(repos, calc):
    repos.attendance.add(1, date(2025, 1, 6))
    repos.attendance.add(1, date(2025, 1, 7))
    repos.attendance.add(1, date(2025, 1, 8), AttendanceStatus.ABSENT)
    repos.attendance.add(1, date(2025, 1, 9), AttendanceStatus.LEAVE)
    repos.attendance.add(1, date(2025, 2, 3))

    assert calc.attendance_days(1, year=2025, month=1) == 2


def test_compute_full_month_with_paid_leave(repos, calc):
    days = weekdays(date(2026, 10, 1), date(2026, 10, 31))
    assert len(days) == 22
    for day in days[:20]:
        repos.attendance.add(1, day)
    repos.leaves.add(1, days[20], days[21])

    worked = calc.compute(1, year=2026, month=10, monthly_salary=Decimal("30000"))

    assert worked.working_days_in_month == 22
    assert worked.attendance.days == 20
    assert worked.paid_time_off.days == 2
    assert worked.total.days == 22
    assert worked.attendance.amount == Decimal("27272.73")
    assert worked.paid_time_off.amount == Decimal("2727.27")
    assert worked.total.amount == Decimal("30000.00")


def test_compute_pro_rates_partial_month(repos, calc):
    for day in weekdays(date(2025, 1, 1), date(2025, 1, 14)):
        repos.attendance.add(1, day)

    worked = calc.compute(1, year=2025, month=1, monthly_salary=Decimal("30000"))

    assert worked.working_days_in_month == 23
    assert worked.total.days == 10
    assert worked.total.amount == Decimal("13043.48")


def test_employer_cost_rounds_half_up():
    assert employer_cost_for(Decimal("30000"), working_days=23, worked_days=10) == Decimal("13043.48")
    assert employer_cost_for(Decimal("30000"), working_days=22, worked_days=0) == Decimal("0.00")


def test_employer_cost_without_working_days_is_full_salary():
    assert employer_cost_for(Decimal("30000"), working_days=0, worked_days=0) == Decimal("30000.00")


def test_prorated_cost_is_not_rounded():
    cost = prorated_cost(Decimal("20000"), working_days=22, worked_days=17)

    assert cost > Decimal("15454.545")
    assert cost < Decimal("15454.546")
    assert employer_cost_for(Decimal("20000"), working_days=22, worked_days=17) == Decimal("15454.55")
