from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    leave_id: int
    emp_id: int
    leave_type: LeaveType
    start_date: date
    end_date: date
    number_of_days: int
    status: LeaveStatus
    reason: Optional[str] = None
    created_at: Optional[datetime] = None
    approved_by: Optional[int] = None
    approved_at: Optional[datetime] = None
    rejection_reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "leave_id": self.leave_id,
            "emp_id": self.emp_id,
            "leave_type": self.leave_type.value,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "number_of_days": self.number_of_days,
            "reason": self.reason or "",
            "status": self.status.value,
            "created_at": self.created_at.isoformat(timespec="seconds") if self.created_at else None,
            "approved_by": self.approved_by,
            "approved_at": self.approved_at.isoformat(timespec="seconds") if self.approved_at else None,
            "rejection_reason": self.rejection_reason,
        }
