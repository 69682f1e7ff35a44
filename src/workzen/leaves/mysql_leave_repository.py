from __future__ import annotations

from datetime import date
from typing import Optional, Sequence

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository

_COLUMNS = """
    leave_id, emp_id, leave_type, start_date, end_date, number_of_days, reason,
    status, created_at, approved_by, approved_at, rejection_reason
"""


def _to_leave(r: dict) -> LeaveRequest:
    return LeaveRequest(
        leave_id=int(r["leave_id"]),
        emp_id=int(r["emp_id"]),
        leave_type=LeaveType(r["leave_type"]),
        start_date=r["start_date"],
        end_date=r["end_date"],
        number_of_days=int(r.get("number_of_days") or 0),
        status=LeaveStatus(r["status"]),
        reason=r.get("reason"),
        created_at=r.get("created_at"),
        approved_by=r.get("approved_by"),
        approved_at=r.get("approved_at"),
        rejection_reason=r.get("rejection_reason"),
    )


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO leave_requests(emp_id, leave_type, start_date, end_date, number_of_days, reason, status)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    int(emp_id),
                    leave_type.value,
                    start_date,
                    end_date,
                    int(number_of_days),
                    reason,
                    LeaveStatus.PENDING.value,
                ),
            )
            return int(cur.lastrowid)

    def get(self, leave_id: int) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM leave_requests WHERE leave_id=%s", (int(leave_id),))
            r = fetchone(cur)
            return _to_leave(r) if r else None

    def list(
        self,
        *,
        status: Optional[LeaveStatus] = None,
        emp_id: Optional[int] = None,
        limit: int = 200,
    ) -> Sequence[LeaveRequest]:
        clauses = ["1=1"]
        params: list[object] = []

        if status is not None:
            clauses.append("status=%s")
            params.append(status.value)
        if emp_id is not None:
            clauses.append("emp_id=%s")
            params.append(int(emp_id))

        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE {where}
                ORDER BY created_at DESC
                LIMIT %s
                """,
                tuple(params + [int(limit)]),
            )
            return [_to_leave(r) for r in fetchall(cur)]

    def decide(
        self,
        *,
        leave_id: int,
        status: LeaveStatus,
        decided_by: int,
        rejection_reason: Optional[str] = None,
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                UPDATE leave_requests
                SET status=%s, approved_by=%s, approved_at=NOW(), rejection_reason=%s
                WHERE leave_id=%s AND status=%s
                """,
                (status.value, int(decided_by), rejection_reason, int(leave_id), LeaveStatus.PENDING.value),
            )
            return cur.rowcount > 0

    def list_overlapping(
        self,
        emp_id: int,
        *,
        status: LeaveStatus,
        leave_type: LeaveType,
        start: date,
        end: date,
    ) -> Sequence[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM leave_requests
                WHERE emp_id=%s AND status=%s AND leave_type=%s
                  AND start_date <= %s AND end_date >= %s
                ORDER BY start_date ASC
                """,
                (int(emp_id), status.value, leave_type.value, end, start),
            )
            return [_to_leave(r) for r in fetchall(cur)]
