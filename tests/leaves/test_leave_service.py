from __future__ import annotations

from datetime import date

import pytest

from workzen.core.enums import LeaveStatus, LeaveType
from workzen.core.exceptions import NotFoundError, ValidationError

ASHA = 1
HR_USER = 3


@pytest.fixture
def service(container):
    return container.leave_service


def test_apply_counts_weekdays_only(service):
    leave = service.apply(
        emp_id=ASHA,
        leave_type="Paid time Off",
        start_date=date(2025, 1, 28),
        end_date=date(2025, 2, 6),
        reason="  family trip ",
    )

    assert leave.status == LeaveStatus.PENDING
    assert leave.leave_type == LeaveType.PAID_TIME_OFF
    assert leave.number_of_days == 8
    assert leave.reason == "family trip"


def test_apply_rejects_bad_input(service):
    with pytest.raises(ValidationError):
        service.apply(emp_id=ASHA, leave_type="Vacation", start_date=date(2025, 1, 6), end_date=date(2025, 1, 7))
    with pytest.raises(ValidationError):
        service.apply(emp_id=ASHA, leave_type="Unpaid", start_date=date(2025, 1, 7), end_date=date(2025, 1, 6))
    with pytest.raises(ValidationError):
        service.apply(emp_id=ASHA, leave_type="Unpaid", start_date=date(2025, 1, 4), end_date=date(2025, 1, 5))
    with pytest.raises(NotFoundError):
        service.apply(emp_id=999, leave_type="Unpaid", start_date=date(2025, 1, 6), end_date=date(2025, 1, 6))


def test_approve_then_decision_is_final(service):
    leave = service.apply(
        emp_id=ASHA,
        leave_type=LeaveType.SICK_TIME_OFF,
        start_date=date(2025, 1, 6),
        end_date=date(2025, 1, 6),
    )

    approved = service.approve(leave_id=leave.leave_id, decided_by=HR_USER)
    assert approved.status == LeaveStatus.APPROVED
    assert approved.approved_by == HR_USER

    with pytest.raises(ValidationError):
        service.reject(leave_id=leave.leave_id, decided_by=HR_USER)


def test_reject_keeps_reason(service):
    leave = service.apply(
        emp_id=ASHA,
        leave_type="Unpaid",
        start_date=date(2025, 1, 6),
        end_date=date(2025, 1, 7),
    )
    rejected = service.reject(leave_id=leave.leave_id, decided_by=HR_USER, reason="Release week")

    assert rejected.status == LeaveStatus.REJECTED
    assert rejected.rejection_reason == "Release week"


def test_unknown_leave(service):
    with pytest.raises(NotFoundError):
        service.approve(leave_id=42, decided_by=HR_USER)


def test_lists(service):
    first = service.apply(emp_id=ASHA, leave_type="Unpaid", start_date=date(2025, 1, 6), end_date=date(2025, 1, 6))
    service.apply(emp_id=2, leave_type="Unpaid", start_date=date(2025, 1, 6), end_date=date(2025, 1, 6))
    service.approve(leave_id=first.leave_id, decided_by=HR_USER)

    assert [lv.emp_id for lv in service.list_mine(emp_id=ASHA)] == [ASHA]
    assert [lv.emp_id for lv in service.list_pending()] == [2]


def test_approved_paid_leave_feeds_payroll(container, service):
    leave = service.apply(
        emp_id=ASHA,
        leave_type="Paid time Off",
        start_date=date(2025, 1, 28),
        end_date=date(2025, 2, 6),
    )
    preview = container.payroll_service.preview(ASHA, month=1, year=2025)
    assert preview.worked_days.paid_time_off.days == 0

    service.approve(leave_id=leave.leave_id, decided_by=HR_USER)

    jan = container.payroll_service.preview(ASHA, month=1, year=2025)
    feb = container.payroll_service.preview(ASHA, month=2, year=2025)
    assert jan.worked_days.paid_time_off.days == 4
    assert feb.worked_days.paid_time_off.days == 4
