from __future__ import annotations

from typing import Optional, Sequence

from ..common.money import to_decimal
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = """
    emp_id, user_id, employee_code, name, email, department, designation, location,
    salary, joining_date, pan, uan, bank_account_number, is_active
"""


def _to_employee(r: dict) -> Employee:
    return Employee(
        emp_id=int(r["emp_id"]),
        user_id=int(r["user_id"]),
        employee_code=r["employee_code"],
        name=r["name"],
        email=r["email"],
        salary=to_decimal(r.get("salary")),
        department=r.get("department"),
        designation=r.get("designation"),
        location=r.get("location"),
        joining_date=r.get("joining_date"),
        pan=r.get("pan"),
        uan=r.get("uan"),
        bank_account_number=r.get("bank_account_number"),
        is_active=bool(r.get("is_active", True)),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, emp_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE emp_id=%s", (int(emp_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def get_by_user_id(self, user_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE user_id=%s", (int(user_id),))
            r = fetchone(cur)
            return _to_employee(r) if r else None

    def list_active(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE is_active=1 ORDER BY employee_code ASC")
            return [_to_employee(r) for r in fetchall(cur)]
