from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import PayrunStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Payrun
from .repository import PayrunRepository


def _to_payrun(r: dict) -> Payrun:
    return Payrun(
        payrun_id=int(r["payrun_id"]),
        month=int(r["month"]),
        year=int(r["year"]),
        status=PayrunStatus(r["status"]),
        generated_by=r.get("generated_by"),
        created_at=r.get("created_at"),
    )


class MySQLPayrunRepository(PayrunRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def create(self, *, month: int, year: int, generated_by: Optional[int]) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO payruns(month, year, status, generated_by)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE payrun_id=LAST_INSERT_ID(payrun_id)
                """,
                (int(month), int(year), PayrunStatus.DRAFT.value, generated_by),
            )
            return int(cur.lastrowid)

    def get(self, payrun_id: int) -> Optional[Payrun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT payrun_id, month, year, status, generated_by, created_at FROM payruns WHERE payrun_id=%s",
                (int(payrun_id),),
            )
            r = fetchone(cur)
            return _to_payrun(r) if r else None

    def get_for_period(self, *, month: int, year: int) -> Optional[Payrun]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT payrun_id, month, year, status, generated_by, created_at
                FROM payruns
                WHERE month=%s AND year=%s
                """,
                (int(month), int(year)),
            )
            r = fetchone(cur)
            return _to_payrun(r) if r else None

    def list(self, *, year: Optional[int] = None) -> Sequence[Payrun]:
        sql = "SELECT payrun_id, month, year, status, generated_by, created_at FROM payruns"
        params: tuple = ()
        if year is not None:
            sql += " WHERE year=%s"
            params = (int(year),)
        sql += " ORDER BY year DESC, month DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_payrun(r) for r in fetchall(cur)]

    def update_status(self, payrun_id: int, status: PayrunStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE payruns SET status=%s WHERE payrun_id=%s", (status.value, int(payrun_id)))
            return cur.rowcount > 0
