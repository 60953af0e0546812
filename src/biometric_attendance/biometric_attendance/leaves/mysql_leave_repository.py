from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import LeaveRequest
from .repository import LeaveRepository


class MySQLLeaveRepository(LeaveRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_approved_covering(self, *, employee_id: int, work_date: date) -> Optional[LeaveRequest]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT request_id, employee_id, start_date, end_date, leave_type, status, reason
                FROM leave_requests
                WHERE employee_id=%s
                  AND status=%s
                  AND start_date <= %s
                  AND end_date >= %s
                ORDER BY start_date DESC, request_id DESC
                LIMIT 1
                """,
                (int(employee_id), LeaveStatus.APPROVED.value, work_date, work_date),
            )
            r = fetchone(cur)
            if not r:
                return None
            return LeaveRequest(
                request_id=int(r["request_id"]),
                employee_id=int(r["employee_id"]),
                start_date=r["start_date"],
                end_date=r["end_date"],
                leave_type=LeaveType(r["leave_type"]),
                status=LeaveStatus(r["status"]),
                reason=r.get("reason"),
            )
