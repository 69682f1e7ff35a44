from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import BankDetails
from .repository import ProfileRepository


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_bank_details(self, user_id: int) -> Optional[BankDetails]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT account_number, bank_name, ifsc_code, pan_number, uan_number
                FROM user_profiles
                WHERE user_id=%s
                """,
                (int(user_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return BankDetails(
                account_number=r.get("account_number") or "",
                bank_name=r.get("bank_name") or "",
                ifsc_code=r.get("ifsc_code") or "",
                pan_number=r.get("pan_number") or "",
                uan_number=r.get("uan_number") or "",
            )
