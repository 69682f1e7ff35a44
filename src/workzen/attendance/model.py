from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one attendance row per employee per calendar day."""

    attendance_id: int
    emp_id: int
    work_date: date
    status: AttendanceStatus
    check_in: Optional[datetime] = None
    check_out: Optional[datetime] = None

    @property
    def worked_minutes(self) -> int:
        if not self.check_in or not self.check_out:
            return 0
        return max(int((self.check_out - self.check_in).total_seconds() // 60), 0)

    def to_dict(self) -> dict:
        return {
            "attendance_id": self.attendance_id,
            "emp_id": self.emp_id,
            "date": self.work_date.isoformat(),
            "check_in": self.check_in.strftime("%H:%M:%S") if self.check_in else None,
            "check_out": self.check_out.strftime("%H:%M:%S") if self.check_out else None,
            "status": self.status.value,
            "worked_minutes": self.worked_minutes,
        }
