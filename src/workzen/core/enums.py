from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Closed set of roles used for authorization."""

    ADMIN = "Admin"
    HR = "HR"
    PAYROLL_OFFICER = "PayrollOfficer"
    EMPLOYEE = "Employee"


class Permission(str, Enum):
    VIEW_PAYROLL = "view_payroll"
    MANAGE_PAYROLL = "manage_payroll"
    MANAGE_PAYRUNS = "manage_payruns"
    REVIEW_LEAVE = "review_leave"
    REQUEST_LEAVE = "request_leave"
    RECORD_ATTENDANCE = "record_attendance"
    VIEW_ATTENDANCE = "view_attendance"


class AttendanceStatus(str, Enum):
    PRESENT = "present"
    ABSENT = "absent"
    LEAVE = "leave"
    HOLIDAY = "holiday"


class LeaveType(str, Enum):
    PAID_TIME_OFF = "Paid time Off"
    SICK_TIME_OFF = "Sick time off"
    UNPAID = "Unpaid"


class LeaveStatus(str, Enum):
    """Approval flow for leave requests."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class PayrollStatus(str, Enum):
    DRAFT = "draft"
    DONE = "done"
    PAID = "paid"


class PayrunStatus(str, Enum):
    DRAFT = "draft"
    PROCESSED = "processed"
    PAID = "paid"
