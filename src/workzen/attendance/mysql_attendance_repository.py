from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        emp_id=int(r["emp_id"]),
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        check_in=r.get("check_in"),
        check_out=r.get("check_out"),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_employee_and_date(self, emp_id: int, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, emp_id, work_date, check_in, check_out, status
                FROM attendance_records
                WHERE emp_id=%s AND work_date=%s
                """,
                (int(emp_id), work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def create_checkin(
        self,
        *,
        emp_id: int,
        work_date: date,
        check_in: datetime,
        status: AttendanceStatus,
    ) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance_records(emp_id, work_date, check_in, status)
                VALUES(%s,%s,%s,%s)
                """,
                (int(emp_id), work_date, check_in, status.value),
            )
            return int(cur.lastrowid)

    def update_checkout(self, *, attendance_id: int, check_out: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_records SET check_out=%s WHERE attendance_id=%s",
                (check_out, int(attendance_id)),
            )
            return cur.rowcount > 0

    def list_for_employee(self, emp_id: int, *, start: date, end: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, emp_id, work_date, check_in, check_out, status
                FROM attendance_records
                WHERE emp_id=%s AND work_date BETWEEN %s AND %s
                ORDER BY work_date ASC
                """,
                (int(emp_id), start, end),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_by_status(self, emp_id: int, *, start: date, end: date, status: AttendanceStatus) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT COUNT(*) AS total
                FROM attendance_records
                WHERE emp_id=%s AND status=%s AND work_date BETWEEN %s AND %s
                """,
                (int(emp_id), status.value, start, end),
            )
            r = fetchone(cur)
            return int(r["total"]) if r else 0
