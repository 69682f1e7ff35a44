from __future__ import annotations

from typing import Optional, Sequence

from ..common.money import round_money
from ..core.enums import PayrollStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, dump_json, fetchall, fetchone, load_json
from .model import EmployeeSnapshot, PayrollRecord, SalaryBreakdown, SalaryLine, WorkedDays
from .repository import PayrollRepository

_COLUMNS = """
    payroll_id, emp_id, month, year, payrun_id, salary_structure, status,
    monthly_salary, employer_cost, worked_days, earnings, deductions,
    employee_snapshot, created_at, updated_at
"""


def _to_record(r: dict) -> PayrollRecord:
    breakdown = SalaryBreakdown(
        employer_cost=round_money(r.get("employer_cost")),
        earnings=[SalaryLine.from_dict(x) for x in load_json(r.get("earnings"), [])],
        deductions=[SalaryLine.from_dict(x) for x in load_json(r.get("deductions"), [])],
    )
    return PayrollRecord(
        payroll_id=int(r["payroll_id"]),
        emp_id=int(r["emp_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        payrun_id=r.get("payrun_id"),
        salary_structure=r.get("salary_structure") or "",
        status=PayrollStatus(r["status"]),
        monthly_salary=round_money(r.get("monthly_salary")),
        worked_days=WorkedDays.from_dict(load_json(r.get("worked_days"), {})),
        breakdown=breakdown,
        employee_snapshot=EmployeeSnapshot.from_dict(load_json(r.get("employee_snapshot"), {})),
        created_at=r.get("created_at"),
        updated_at=r.get("updated_at"),
    )


def _filters(*, month, year, emp_id, payrun_id) -> tuple[str, list[object]]:
    clauses = ["1=1"]
    params: list[object] = []

    if month is not None:
        clauses.append("month=%s")
        params.append(int(month))
    if year is not None:
        clauses.append("year=%s")
        params.append(int(year))
    if emp_id is not None:
        clauses.append("emp_id=%s")
        params.append(int(emp_id))
    if payrun_id is not None:
        clauses.append("payrun_id=%s")
        params.append(int(payrun_id))

    return " AND ".join(clauses), params


class MySQLPayrollRepository(PayrollRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def upsert(self, record: PayrollRecord) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payrolls(
                    emp_id, month, year, payrun_id, salary_structure, status,
                    monthly_salary, employer_cost, gross_amount, total_deductions, net_amount,
                    worked_days, earnings, deductions, employee_snapshot
                )
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE
                    payroll_id=LAST_INSERT_ID(payroll_id),
                    payrun_id=VALUES(payrun_id),
                    salary_structure=VALUES(salary_structure),
                    status=VALUES(status),
                    monthly_salary=VALUES(monthly_salary),
                    employer_cost=VALUES(employer_cost),
                    gross_amount=VALUES(gross_amount),
                    total_deductions=VALUES(total_deductions),
                    net_amount=VALUES(net_amount),
                    worked_days=VALUES(worked_days),
                    earnings=VALUES(earnings),
                    deductions=VALUES(deductions),
                    employee_snapshot=VALUES(employee_snapshot)
                """,
                (
                    int(record.emp_id),
                    int(record.month),
                    int(record.year),
                    record.payrun_id,
                    record.salary_structure,
                    record.status.value,
                    record.monthly_salary,
                    record.employer_cost,
                    record.gross,
                    record.total_deductions,
                    record.net,
                    dump_json(record.worked_days.to_dict()),
                    dump_json([line.to_dict() for line in record.breakdown.earnings]),
                    dump_json([line.to_dict() for line in record.breakdown.deductions]),
                    dump_json(record.employee_snapshot.to_dict()),
                ),
            )
            return int(cur.lastrowid)

    def get(self, payroll_id: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_for_period(self, emp_id: int, *, month: int, year: int) -> Optional[PayrollRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM payrolls WHERE emp_id=%s AND month=%s AND year=%s",
                (int(emp_id), int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        emp_id: Optional[int] = None,
        payrun_id: Optional[int] = None,
        limit: int = 200,
        offset: int = 0,
    ) -> Sequence[PayrollRecord]:
        where, params = _filters(month=month, year=year, emp_id=emp_id, payrun_id=payrun_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM payrolls
                WHERE {where}
                ORDER BY year DESC, month DESC, emp_id ASC
                LIMIT %s OFFSET %s
                """,
                tuple(params + [int(limit), int(offset)]),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count(
        self,
        *,
        month: Optional[int] = None,
        year: Optional[int] = None,
        emp_id: Optional[int] = None,
        payrun_id: Optional[int] = None,
    ) -> int:
        where, params = _filters(month=month, year=year, emp_id=emp_id, payrun_id=payrun_id)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT COUNT(*) AS total FROM payrolls WHERE {where}", tuple(params))
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def update_status(self, payroll_id: int, status: PayrollStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE payrolls SET status=%s WHERE payroll_id=%s", (status.value, int(payroll_id)))
            return cur.rowcount > 0

    def delete(self, payroll_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM payrolls WHERE payroll_id=%s", (int(payroll_id),))
            return cur.rowcount > 0
