from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Optional

from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.repository import AttendanceRepository
from .attendance.service import AttendanceService
from .core.constants import DEFAULT_DASHBOARD_MONTHS, DEFAULT_PROFESSIONAL_TAX
from .database.connection import DBConfig, DatabaseConnection
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .employees.mysql_profile_repository import MySQLProfileRepository
from .employees.repository import EmployeeRepository, ProfileRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.repository import LeaveRepository
from .leaves.service import LeaveService
from .payroll.calculator.standard_calculator import StandardSalaryCalculator
from .payroll.dashboard import PayrollDashboardService
from .payroll.mysql_payroll_repository import MySQLPayrollRepository
from .payroll.mysql_payrun_repository import MySQLPayrunRepository
from .payroll.repository import PayrollRepository, PayrunRepository
from .payroll.service import PayrollService
from .payroll.worked_days import WorkedDaysCalculator
from .users.mysql_user_repository import MySQLUserRepository
from .users.repository import UserRepository
from .users.service import AuthService


@dataclass(frozen=True)
class Container:
    users_repo: UserRepository
    employees_repo: EmployeeRepository
    profiles_repo: ProfileRepository
    attendance_repo: AttendanceRepository
    leaves_repo: LeaveRepository
    payrolls_repo: PayrollRepository
    payruns_repo: PayrunRepository

    auth_service: AuthService
    attendance_service: AttendanceService
    leave_service: LeaveService
    payroll_service: PayrollService
    payroll_dashboard_service: PayrollDashboardService

    conn: Optional[DatabaseConnection] = None


def wire(
    *,
    users_repo: UserRepository,
    employees_repo: EmployeeRepository,
    profiles_repo: ProfileRepository,
    attendance_repo: AttendanceRepository,
    leaves_repo: LeaveRepository,
    payrolls_repo: PayrollRepository,
    payruns_repo: PayrunRepository,
    professional_tax: Decimal = DEFAULT_PROFESSIONAL_TAX,
    dashboard_months: int = DEFAULT_DASHBOARD_MONTHS,
    conn: Optional[DatabaseConnection] = None,
) -> Container:
    """Build services on top of any repository implementations (MySQL or in-memory)."""

    payroll_service = PayrollService(
        employees=employees_repo,
        profiles=profiles_repo,
        payrolls=payrolls_repo,
        payruns=payruns_repo,
        worked_days=WorkedDaysCalculator(attendance_repo, leaves_repo),
        calculator=StandardSalaryCalculator(professional_tax=professional_tax),
    )
    dashboard_service = PayrollDashboardService(
        employees=employees_repo,
        profiles=profiles_repo,
        payrolls=payrolls_repo,
        payruns=payruns_repo,
        months=dashboard_months,
    )

    return Container(
        users_repo=users_repo,
        employees_repo=employees_repo,
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        leaves_repo=leaves_repo,
        payrolls_repo=payrolls_repo,
        payruns_repo=payruns_repo,
        auth_service=AuthService(users_repo, employees_repo),
        attendance_service=AttendanceService(attendance_repo, employees_repo),
        leave_service=LeaveService(leaves_repo, employees_repo),
        payroll_service=payroll_service,
        payroll_dashboard_service=dashboard_service,
        conn=conn,
    )


def build_container(*, db_config: dict, settings: Any = None) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_dict(db_config))

    return wire(
        users_repo=MySQLUserRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        payrolls_repo=MySQLPayrollRepository(conn),
        payruns_repo=MySQLPayrunRepository(conn),
        professional_tax=Decimal(str(getattr(settings, "PROFESSIONAL_TAX", DEFAULT_PROFESSIONAL_TAX))),
        dashboard_months=int(getattr(settings, "DASHBOARD_MONTHS", DEFAULT_DASHBOARD_MONTHS)),
        conn=conn,
    )
