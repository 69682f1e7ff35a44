from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import month_bounds, now_local
from ..common.validators import require_month, require_year
from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class MonthlyAttendance:
    emp_id: int
    year: int
    month: int
    records: list[AttendanceRecord]

    @property
    def present_days(self) -> int:
        return sum(1 for r in self.records if r.status == AttendanceStatus.PRESENT)

    @property
    def worked_minutes(self) -> int:
        return sum(r.worked_minutes for r in self.records)

    def to_dict(self) -> dict:
        minutes = self.worked_minutes
        return {
            "emp_id": self.emp_id,
            "year": self.year,
            "month": self.month,
            "present_days": self.present_days,
            "worked_hours": f"{minutes // 60:02d}:{minutes % 60:02d}",
            "records": [r.to_dict() for r in self.records],
        }


class AttendanceService:
    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository):
        self._attendance = attendance
        self._employees = employees

    def _require_employee(self, emp_id: int) -> None:
        if not self._employees.get_by_id(int(emp_id)):
            raise NotFoundError("Employee not found")

    def check_in(self, emp_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        today = now.date()
        self._require_employee(emp_id)

        if self._attendance.get_for_employee_and_date(int(emp_id), today):
            raise ValidationError("Already checked in today")

        attendance_id = self._attendance.create_checkin(
            emp_id=int(emp_id),
            work_date=today,
            check_in=now,
            status=AttendanceStatus.PRESENT,
        )
        logger.info("employee %s checked in at %s", emp_id, now.isoformat(timespec="seconds"))
        return AttendanceRecord(
            attendance_id=attendance_id,
            emp_id=int(emp_id),
            work_date=today,
            status=AttendanceStatus.PRESENT,
            check_in=now,
        )

    def check_out(self, emp_id: int, *, now: Optional[datetime] = None) -> AttendanceRecord:
        now = now or now_local()
        record = self._attendance.get_for_employee_and_date(int(emp_id), now.date())
        if not record or not record.check_in:
            raise ValidationError("You have not checked in today")
        if record.check_out is not None:
            raise ValidationError("Already checked out today")
        if now < record.check_in:
            raise ValidationError("Check-out cannot be before check-in")

        if not self._attendance.update_checkout(attendance_id=record.attendance_id, check_out=now):
            raise ValidationError("Check-out failed")

        return AttendanceRecord(
            attendance_id=record.attendance_id,
            emp_id=record.emp_id,
            work_date=record.work_date,
            status=record.status,
            check_in=record.check_in,
            check_out=now,
        )

    def monthly_summary(self, emp_id: int, *, year, month) -> MonthlyAttendance:
        year = require_year(year)
        month = require_month(month)
        self._require_employee(emp_id)

        start, end = month_bounds(year, month)
        records = list(self._attendance.list_for_employee(int(emp_id), start=start, end=end))
        return MonthlyAttendance(emp_id=int(emp_id), year=year, month=month, records=records)
