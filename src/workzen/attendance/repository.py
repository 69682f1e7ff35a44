from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, emp_id: int, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create_checkin(
        self,
        *,
        emp_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> int:
        raise NotImplementedError

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        raise NotImplementedError

    def list_for_employee(self, emp_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_by_status(self, emp_id: int, *, start: date, end: date, status: AttendanceStatus) -> int:
        """Rows for `emp_id` with `status` and work_date in [start, end]."""

        raise NotImplementedError
