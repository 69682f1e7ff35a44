from __future__ import annotations

import logging
from datetime import date
from typing import Optional, Sequence

from ..common.datetime_utils import count_weekdays
from ..common.validators import require_date_range, require_enum
from ..core.constants import DEFAULT_LIST_LIMIT
from ..core.enums import LeaveStatus, LeaveType
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from .model import LeaveRequest
from .repository import LeaveRepository

logger = logging.getLogger(__name__)


class LeaveService:
    def __init__(self, leaves: LeaveRepository, employees: EmployeeRepository):
        self._leaves = leaves
        self._employees = employees

    def apply(
        self,
        *,
        emp_id: int,
        leave_type,
        start_date: date,
        end_date: date,
        reason: str = "",
    ) -> LeaveRequest:
        if not self._employees.get_by_id(int(emp_id)):
            raise NotFoundError("Employee not found")

        leave_type = require_enum(LeaveType, leave_type, "leave type")
        require_date_range(start_date, end_date)

        number_of_days = count_weekdays(start_date, end_date)
        if number_of_days == 0:
            raise ValidationError("Leave range contains no working days")

        leave_id = self._leaves.create(
            emp_id=int(emp_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            number_of_days=number_of_days,
            reason=(reason or "").strip() or None,
        )
        return self._get(leave_id)

    def _get(self, leave_id: int) -> LeaveRequest:
        leave = self._leaves.get(int(leave_id))
        if not leave:
            raise NotFoundError("Leave request not found")
        return leave

    def _decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: int,
        rejection_reason: Optional[str] = None,
    ) -> LeaveRequest:
        leave = self._get(leave_id)
        if leave.status != LeaveStatus.PENDING:
            raise ValidationError(f"Leave request is already {leave.status.value}")

        if not self._leaves.decide(
            leave_id=int(leave_id),
            status=status,
            decided_by=int(decided_by),
            rejection_reason=rejection_reason,
        ):
            raise ValidationError("Leave request is no longer pending")

        logger.info("leave %s %s by user %s", leave_id, status.value, decided_by)
        return self._get(leave_id)

    def approve(self, *, leave_id: int, decided_by: int) -> LeaveRequest:
        return self._decide(leave_id=leave_id, status=LeaveStatus.APPROVED, decided_by=decided_by)

    def reject(self, *, leave_id: int, decided_by: int, reason: str = "") -> LeaveRequest:
        return self._decide(
            leave_id=leave_id,
            status=LeaveStatus.REJECTED,
            decided_by=decided_by,
            rejection_reason=(reason or "").strip() or None,
        )

    def list_mine(self, *, emp_id: int) -> Sequence[LeaveRequest]:
        return self._leaves.list(emp_id=int(emp_id), limit=DEFAULT_LIST_LIMIT)

    def list_pending(self) -> Sequence[LeaveRequest]:
        return self._leaves.list(status=LeaveStatus.PENDING, limit=DEFAULT_LIST_LIMIT)
