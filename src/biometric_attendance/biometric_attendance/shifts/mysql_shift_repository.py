from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, normalize_mysql_time
from .model import Shift
from .repository import ShiftRepository


class MySQLShiftRepository(ShiftRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT shift_id, name, code, start_time, end_time, working_hours, grace_minutes
                FROM shifts
                WHERE shift_id=%s
                """,
                (int(shift_id),),
            )
            r = fetchone(cur)
            if not r:
                return None
            return Shift(
                shift_id=int(r["shift_id"]),
                name=r["name"],
                code=r["code"],
                start_time=normalize_mysql_time(r["start_time"]),
                end_time=normalize_mysql_time(r["end_time"]),
                working_hours=float(r["working_hours"]),
                grace_minutes=int(r["grace_minutes"]),
            )
