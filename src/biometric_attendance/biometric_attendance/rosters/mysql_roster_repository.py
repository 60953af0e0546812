from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, Optional

from ..core.enums import RosterStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, from_db_utc, to_db_utc
from .model import MonthlyRoster, RosterAssignment
from .repository import RosterRepository

_COLUMNS = "roster_id, facility_id, month, name, status, effective_from, effective_to, published_at"


class MySQLRosterRepository(RosterRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def _load(self, cur, r: Dict[str, Any]) -> MonthlyRoster:
        cur.execute(
            """
            SELECT employee_id, shift_id, note
            FROM roster_assignments
            WHERE roster_id=%s
            ORDER BY employee_id
            """,
            (int(r["roster_id"]),),
        )
        assignments = tuple(
            RosterAssignment(employee_id=int(a["employee_id"]), shift_id=int(a["shift_id"]), note=a.get("note"))
            for a in fetchall(cur)
        )
        return MonthlyRoster(
            roster_id=int(r["roster_id"]),
            facility_id=int(r["facility_id"]),
            month=r["month"],
            name=r["name"],
            status=RosterStatus(r["status"]),
            effective_from=r["effective_from"],
            effective_to=r["effective_to"],
            assignments=assignments,
            published_at=from_db_utc(r.get("published_at")),
        )

    def get_by_id(self, roster_id: int) -> Optional[MonthlyRoster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM monthly_rosters WHERE roster_id=%s", (int(roster_id),))
            r = fetchone(cur)
            return self._load(cur, r) if r else None

    def find_published_for(self, *, facility_id: int, employee_id: int, work_date: date) -> Optional[MonthlyRoster]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT r.roster_id, r.facility_id, r.month, r.name, r.status,
                       r.effective_from, r.effective_to, r.published_at
                FROM monthly_rosters r
                JOIN roster_assignments ra ON ra.roster_id = r.roster_id
                WHERE r.facility_id=%s
                  AND ra.employee_id=%s
                  AND r.status=%s
                  AND r.effective_from <= %s
                  AND r.effective_to >= %s
                ORDER BY r.effective_from DESC
                LIMIT 1
                """,
                (int(facility_id), int(employee_id), RosterStatus.PUBLISHED.value, work_date, work_date),
            )
            r = fetchone(cur)
            return self._load(cur, r) if r else None

    def publish(self, *, roster_id: int, published_at: datetime) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT roster_id FROM monthly_rosters WHERE roster_id=%s FOR UPDATE", (int(roster_id),))
            if not fetchone(cur):
                return False
            cur.execute(
                """
                UPDATE monthly_rosters
                SET status=%s, published_at=%s
                WHERE roster_id=%s
                """,
                (RosterStatus.PUBLISHED.value, to_db_utc(published_at), int(roster_id)),
            )
            cur.execute(
                """
                UPDATE employees e
                JOIN roster_assignments ra ON ra.employee_id = e.employee_id
                SET e.shift_id = ra.shift_id
                WHERE ra.roster_id=%s
                """,
                (int(roster_id),),
            )
            return True

    def set_status(self, *, roster_id: int, status: RosterStatus) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE monthly_rosters SET status=%s WHERE roster_id=%s", (status.value, int(roster_id)))
            return cur.rowcount > 0
