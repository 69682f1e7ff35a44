from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

import pytest
from werkzeug.security import generate_password_hash

from workzen.attendance.model import AttendanceRecord
from workzen.container import Container, wire
from workzen.core.enums import AttendanceStatus, LeaveStatus, LeaveType, PayrollStatus, PayrunStatus, Role
from workzen.employees.model import BankDetails, Employee
from workzen.leaves.model import LeaveRequest
from workzen.payroll.model import PayrollRecord, Payrun
from workzen.users.model import User


class InMemoryUsers:
    def __init__(self):
        self.users_by_id: dict[int, User] = {}

    def add(self, user: User) -> User:
        self.users_by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self.users_by_id.get(int(user_id))

    def get_by_login(self, login: str) -> Optional[User]:
        for user in self.users_by_id.values():
            if login in (user.email, user.login_id):
                return user
        return None


class InMemoryEmployees:
    def __init__(self):
        self.by_id: dict[int, Employee] = {}

    def add(self, employee: Employee) -> Employee:
        self.by_id[employee.emp_id] = employee
        return employee

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        return self.by_id.get(int(emp_id))

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        for employee in self.by_id.values():
            if employee.user_id == int(user_id):
                return employee
        return None

    def list_active(self):
        return [e for e in self.by_id.values() if e.is_active]


class InMemoryProfiles:
    def __init__(self):
        self.by_user_id: dict[int, BankDetails] = {}

    def get_bank_details(self, user_id: int) -> Optional[BankDetails]:
        return self.by_user_id.get(int(user_id))


class InMemoryAttendance:
    def __init__(self):
        self._next_id = 1
        self._by_emp_date: dict[tuple[int, date], AttendanceRecord] = {}

    def add(self, emp_id: int, work_date: date, status: AttendanceStatus = AttendanceStatus.PRESENT) -> None:
        self.create_checkin(
            emp_id=emp_id,
            work_date=work_date,
            check_in=datetime.combine(work_date, datetime.min.time()).replace(hour=9),
            status=status,
        )

    def get_for_employee_and_date(self, emp_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_emp_date.get((int(emp_id), work_date))

    def create_checkin(self, *, emp_id, work_date, check_in, status) -> int:
        attendance_id = self._next_id
        self._next_id += 1
        self._by_emp_date[(int(emp_id), work_date)] = AttendanceRecord(
            attendance_id=attendance_id,
            emp_id=int(emp_id),
            work_date=work_date,
            status=status,
            check_in=check_in,
        )
        return attendance_id

    def update_checkout(self, *, attendance_id, check_out) -> bool:
        for key, record in self._by_emp_date.items():
            if record.attendance_id == attendance_id:
                self._by_emp_date[key] = replace(record, check_out=check_out)
                return True
        return False

    def list_for_employee(self, emp_id: int, *, start: date, end: date):
        rows = [r for (e, d), r in self._by_emp_date.items() if e == int(emp_id) and start <= d <= end]
        return sorted(rows, key=lambda r: r.work_date)

    def count_by_status(self, emp_id: int, *, start: date, end: date, status: AttendanceStatus) -> int:
        return sum(1 for r in self.list_for_employee(emp_id, start=start, end=end) if r.status == status)


class InMemoryLeaves:
    def __init__(self):
        self._next_id = 1
        self.by_id: dict[int, LeaveRequest] = {}

    def add(
        self,
        emp_id: int,
        start_date: date,
        end_date: date,
        *,
        leave_type: LeaveType = LeaveType.PAID_TIME_OFF,
        status: LeaveStatus = LeaveStatus.APPROVED,
    ) -> int:
        leave_id = self.create(
            emp_id=emp_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            number_of_days=0,
            reason=None,
        )
        self.by_id[leave_id] = replace(self.by_id[leave_id], status=status)
        return leave_id

    def create(self, *, emp_id, leave_type, start_date, end_date, number_of_days, reason) -> int:
        leave_id = self._next_id
        self._next_id += 1
        self.by_id[leave_id] = LeaveRequest(
            leave_id=leave_id,
            emp_id=int(emp_id),
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            number_of_days=number_of_days,
            status=LeaveStatus.PENDING,
            reason=reason,
            created_at=datetime(2025, 1, 1, 9, 0, 0),
        )
        return leave_id

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        return self.by_id.get(int(leave_id))

    def list(self, *, status=None, emp_id=None, limit=200):
        rows = [
            lv
            for lv in self.by_id.values()
            if (status is None or lv.status == status) and (emp_id is None or lv.emp_id == int(emp_id))
        ]
        return rows[:limit]

    def decide(self, *, leave_id, status, decided_by, rejection_reason=None) -> bool:
        leave = self.by_id.get(int(leave_id))
        if not leave or leave.status != LeaveStatus.PENDING:
            return False
        self.by_id[int(leave_id)] = replace(
            leave,
            status=status,
            approved_by=decided_by,
            approved_at=datetime(2025, 1, 2, 10, 0, 0),
            rejection_reason=rejection_reason,
        )
        return True

    def list_overlapping(self, emp_id, *, status, leave_type, start, end):
        return [
            lv
            for lv in self.by_id.values()
            if lv.emp_id == int(emp_id)
            and lv.status == status
            and lv.leave_type == leave_type
            and lv.start_date <= end
            and lv.end_date >= start
        ]


class InMemoryPayrolls:
    def __init__(self):
        self._next_id = 1
        self.by_key: dict[tuple[int, int, int], PayrollRecord] = {}
        self.writes = 0

    def upsert(self, record: PayrollRecord) -> int:
        self.writes += 1
        key = (record.emp_id, record.month, record.year)
        existing = self.by_key.get(key)
        payroll_id = existing.payroll_id if existing else self._next_id
        if not existing:
            self._next_id += 1
        self.by_key[key] = replace(record, payroll_id=payroll_id)
        return payroll_id

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        for record in self.by_key.values():
            if record.payroll_id == int(payroll_id):
                return record
        return None

    def get_for_period(self, emp_id: int, *, month: int, year: int) -> Optional[PayrollRecord]:
        return self.by_key.get((int(emp_id), int(month), int(year)))

    def _matching(self, *, month=None, year=None, emp_id=None, payrun_id=None):
        rows = [
            r
            for r in self.by_key.values()
            if (month is None or r.month == month)
            and (year is None or r.year == year)
            and (emp_id is None or r.emp_id == emp_id)
            and (payrun_id is None or r.payrun_id == payrun_id)
        ]
        return sorted(rows, key=lambda r: (-r.year, -r.month, r.emp_id))

    def list(self, *, month=None, year=None, emp_id=None, payrun_id=None, limit=200, offset=0):
        rows = self._matching(month=month, year=year, emp_id=emp_id, payrun_id=payrun_id)
        return rows[offset : offset + limit]

    def count(self, *, month=None, year=None, emp_id=None, payrun_id=None) -> int:
        return len(self._matching(month=month, year=year, emp_id=emp_id, payrun_id=payrun_id))

    def update_status(self, payroll_id: int, status: PayrollStatus) -> bool:
        for key, record in self.by_key.items():
            if record.payroll_id == int(payroll_id):
                self.by_key[key] = replace(record, status=status)
                return True
        return False

    def delete(self, payroll_id: int) -> bool:
        for key, record in list(self.by_key.items()):
            if record.payroll_id == int(payroll_id):
                del self.by_key[key]
                return True
        return False


class InMemoryPayruns:
    def __init__(self):
        self._next_id = 1
        self.by_id: dict[int, Payrun] = {}

    def create(self, *, month, year, generated_by) -> int:
        payrun_id = self._next_id
        self._next_id += 1
        self.by_id[payrun_id] = Payrun(
            payrun_id=payrun_id,
            month=int(month),
            year=int(year),
            status=PayrunStatus.DRAFT,
            generated_by=generated_by,
            created_at=datetime(2025, 1, 31, 18, 0, 0),
        )
        return payrun_id

    def get(self, payrun_id: int) -> Optional[Payrun]:
        return self.by_id.get(int(payrun_id))

    def get_for_period(self, *, month, year) -> Optional[Payrun]:
        for payrun in self.by_id.values():
            if payrun.month == int(month) and payrun.year == int(year):
                return payrun
        return None

    def list(self, *, year=None):
        rows = [p for p in self.by_id.values() if year is None or p.year == int(year)]
        return sorted(rows, key=lambda p: (p.year, p.month), reverse=True)

    def update_status(self, payrun_id: int, status: PayrunStatus) -> bool:
        payrun = self.by_id.get(int(payrun_id))
        if not payrun:
            return False
        self.by_id[int(payrun_id)] = replace(payrun, status=status)
        return True


@dataclass
class Repos:
    users: InMemoryUsers = field(default_factory=InMemoryUsers)
    employees: InMemoryEmployees = field(default_factory=InMemoryEmployees)
    profiles: InMemoryProfiles = field(default_factory=InMemoryProfiles)
    attendance: InMemoryAttendance = field(default_factory=InMemoryAttendance)
    leaves: InMemoryLeaves = field(default_factory=InMemoryLeaves)
    payrolls: InMemoryPayrolls = field(default_factory=InMemoryPayrolls)
    payruns: InMemoryPayruns = field(default_factory=InMemoryPayruns)

    def add_person(
        self,
        *,
        user_id: int,
        name: str,
        role: Role,
        password: str = "secret123",
        emp_id: Optional[int] = None,
        salary: Decimal = Decimal("30000"),
        bank: Optional[BankDetails] = None,
    ) -> Optional[Employee]:
        login_id = name.split()[0].lower()
        self.users.add(
            User(
                user_id=user_id,
                name=name,
                email=f"{login_id}@workzen.local",
                password_hash=generate_password_hash(password),
                role=role,
                login_id=login_id,
            )
        )
        if bank is not None:
            self.profiles.by_user_id[user_id] = bank
        if emp_id is None:
            return None
        return self.employees.add(
            Employee(
                emp_id=emp_id,
                user_id=user_id,
                employee_code=f"EMP-{emp_id:04d}",
                name=name,
                email=f"{login_id}@workzen.local",
                salary=salary,
                department="Engineering",
                designation="Developer",
                location="Pune",
                joining_date=date(2023, 4, 1),
                pan="ABCDE1234F",
                uan="100200300400",
            )
        )


ASHA_BANK = BankDetails(
    account_number="001122334455",
    bank_name="State Bank",
    ifsc_code="SBIN0000001",
    pan_number="ABCDE1234F",
    uan_number="100200300400",
)


@pytest.fixture
def repos() -> Repos:
    r = Repos()
    r.add_person(user_id=1, name="Admin User", role=Role.ADMIN, password="admin123")
    r.add_person(user_id=2, name="Payroll Officer", role=Role.PAYROLL_OFFICER, password="payroll123")
    r.add_person(user_id=3, name="Hema HR", role=Role.HR, password="hr12345", emp_id=3, bank=ASHA_BANK)
    r.add_person(
        user_id=4,
        name="Asha Rao",
        role=Role.EMPLOYEE,
        password="employee123",
        emp_id=1,
        salary=Decimal("30000"),
        bank=ASHA_BANK,
    )
    r.add_person(
        user_id=5,
        name="Vikram Shah",
        role=Role.EMPLOYEE,
        password="employee123",
        emp_id=2,
        salary=Decimal("45000"),
    )
    return r


@pytest.fixture
def container(repos: Repos) -> Container:
    return wire(
        users_repo=repos.users,
        employees_repo=repos.employees,
        profiles_repo=repos.profiles,
        attendance_repo=repos.attendance,
        leaves_repo=repos.leaves,
        payrolls_repo=repos.payrolls,
        payruns_repo=repos.payruns,
    )
