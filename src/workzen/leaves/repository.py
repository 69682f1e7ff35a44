from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus, LeaveType
from .model import LeaveRequest


class LeaveRepository(Protocol):
    def create(
        self,
        *,
        emp_id: int,
        leave_type: LeaveType,
        start_date: date,
        end_date: date,
        number_of_days: int,
        reason: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        emp_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        """Move a pending leave to `status`. Returns False when nothing was pending."""

        raise NotImplementedError

    def list_overlapping(
        self,
        emp_id: int,
        *,
        status: LeaveStatus,
        leave_type: LeaveType,
        start: date,
        end: date,
    ) -> Sequence[LeaveRequest]:
        """Leaves whose [start_date, end_date] intersects [start, end]."""

        raise NotImplementedError
