from __future__ import annotations

from decimal import Decimal

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import clip_range, count_weekdays, month_bounds, working_days_in_month
from ..common.money import round_money, to_decimal
from ..core.enums import AttendanceStatus, LeaveStatus, LeaveType
from ..leaves.repository import LeaveRepository
from .model import WorkedDays, WorkedDaysLine


def prorated_cost(monthly_salary: Decimal, *, working_days: int, worked_days: int) -> Decimal:
    """Monthly salary pro-rated by worked days, unrounded.

    A month without working days pays the full salary.
    """

    salary = to_decimal(monthly_salary)
    if working_days <= 0:
        return salary
    return salary * Decimal(worked_days) / Decimal(working_days)


def employer_cost_for(monthly_salary: Decimal, *, working_days: int, worked_days: int) -> Decimal:
    """Pro-rated employer cost rounded half-up to 2 places, as reported."""

    return round_money(prorated_cost(monthly_salary, working_days=working_days, worked_days=worked_days))


class WorkedDaysCalculator:
    """Counts present days and approved paid time off for one employee and month.

    Paid leave is clipped to the month first so a leave spanning two months
    credits each month with its own weekdays only.
    """

    def __init__(self, attendance: AttendanceRepository, leaves: LeaveRepository):
        self._attendance = attendance
        self._leaves = leaves

    def attendance_days(self, emp_id: int, *, year: int, month: int) -> int:
        start, end = month_bounds(year, month)
        return int(
            self._attendance.count_by_status(int(emp_id), start=start, end=end, status=AttendanceStatus.PRESENT)
        )

    def paid_leave_days(self, emp_id: int, *, year: int, month: int) -> int:
        start, end = month_bounds(year, month)
        leaves = self._leaves.list_overlapping(
            int(emp_id),
            status=LeaveStatus.APPROVED,
            leave_type=LeaveType.PAID_TIME_OFF,
            start=start,
            end=end,
        )

        total = 0
        for leave in leaves:
            if leave.status != LeaveStatus.APPROVED or leave.leave_type != LeaveType.PAID_TIME_OFF:
                continue
            clipped_start, clipped_end = clip_range(leave.start_date, leave.end_date, start, end)
            total += count_weekdays(clipped_start, clipped_end)
        return total

    def compute(self, emp_id: int, *, year: int, month: int, monthly_salary: Decimal) -> WorkedDays:
        working_days = working_days_in_month(year, month)
        attendance_days = self.attendance_days(emp_id, year=year, month=month)
        paid_days = self.paid_leave_days(emp_id, year=year, month=month)
        total_days = attendance_days + paid_days

        salary = to_decimal(monthly_salary)
        per_day = salary / Decimal(working_days) if working_days > 0 else salary

        return WorkedDays(
            working_days_in_month=working_days,
            attendance=WorkedDaysLine(
                days=attendance_days,
                amount=round_money(per_day * attendance_days),
                note=f"{working_days} working days in month",
            ),
            paid_time_off=WorkedDaysLine(
                days=paid_days,
                amount=round_money(per_day * paid_days),
                note=f"{paid_days} paid leave days",
            ),
            total=WorkedDaysLine(
                days=total_days,
                amount=employer_cost_for(salary, working_days=working_days, worked_days=total_days),
            ),
        )
