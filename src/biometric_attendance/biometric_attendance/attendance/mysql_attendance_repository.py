from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Any, Dict, Optional

from ..core.enums import STICKY_STATUSES, AttendanceStatus, AttendanceType
from ..core.exceptions import StoreConflict
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone, from_db_utc, from_json, is_duplicate_key, to_db_utc, to_json
from .model import AttendanceRecord, StatusRewrite
from .repository import AttendanceRepository

_COLUMNS = """
    attendance_id, employee_id, facility_id, shift_id, work_date, type, event_time, status,
    late_arrival_minutes, work_duration_minutes, overtime_minutes, undertime_minutes,
    source_event_id, leave_id, scheduled_check_in, scheduled_check_out,
    device_key, verification_methods, raw_payload
"""


def _row_to_record(r: Dict[str, Any]) -> AttendanceRecord:
    methods = r.get("verification_methods") or ""
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        employee_id=int(r["employee_id"]),
        facility_id=int(r["facility_id"]),
        shift_id=int(r["shift_id"]),
        work_date=r["work_date"],
        type=AttendanceType(r["type"]),
        timestamp=from_db_utc(r["event_time"]),
        status=AttendanceStatus(r["status"]),
        late_arrival_minutes=int(r.get("late_arrival_minutes") or 0),
        work_duration_minutes=int(r.get("work_duration_minutes") or 0),
        overtime_minutes=int(r.get("overtime_minutes") or 0),
        undertime_minutes=int(r.get("undertime_minutes") or 0),
        source_event_id=r.get("source_event_id"),
        leave_id=int(r["leave_id"]) if r.get("leave_id") is not None else None,
        scheduled_check_in=from_db_utc(r.get("scheduled_check_in")),
        scheduled_check_out=from_db_utc(r.get("scheduled_check_out")),
        device_key=r.get("device_key"),
        verification_methods=tuple(m for m in methods.split(",") if m),
        raw_payload=from_json(r.get("raw_payload")),
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_by_source_event(self, *, employee_id: int, work_date: date, source_event_id: str) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s AND source_event_id=%s
                LIMIT 1
                """,
                (int(employee_id), work_date, source_event_id),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def find_in_window(
        self,
        *,
        employee_id: int,
        work_date: date,
        type: AttendanceType,
        source_event_id: Optional[str],
        start: datetime,
        end: datetime,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s AND type=%s
                  AND (source_event_id=%s OR event_time BETWEEN %s AND %s)
                ORDER BY event_time ASC
                LIMIT 1
                """,
                (int(employee_id), work_date, type.value, source_event_id, to_db_utc(start), to_db_utc(end)),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def latest_of_type(self, *, employee_id: int, work_date: date, type: AttendanceType) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s AND type=%s
                ORDER BY event_time DESC
                LIMIT 1
                """,
                (int(employee_id), work_date, type.value),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def insert(self, record: AttendanceRecord, *, rewrite: Optional[StatusRewrite] = None) -> AttendanceRecord:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(
                        employee_id, facility_id, shift_id, work_date, type, event_time, status,
                        late_arrival_minutes, work_duration_minutes, overtime_minutes, undertime_minutes,
                        source_event_id, leave_id, scheduled_check_in, scheduled_check_out,
                        device_key, verification_methods, raw_payload
                    )
                    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        record.employee_id,
                        record.facility_id,
                        record.shift_id,
                        record.work_date,
                        record.type.value,
                        to_db_utc(record.timestamp),
                        record.status.value,
                        record.late_arrival_minutes,
                        record.work_duration_minutes,
                        record.overtime_minutes,
                        record.undertime_minutes,
                        record.source_event_id,
                        record.leave_id,
                        to_db_utc(record.scheduled_check_in),
                        to_db_utc(record.scheduled_check_out),
                        record.device_key,
                        ",".join(record.verification_methods),
                        to_json(record.raw_payload),
                    ),
                )
                attendance_id = int(cur.lastrowid)

                if rewrite is not None:
                    sticky = tuple(s.value for s in STICKY_STATUSES)
                    cur.execute(
                        """
                        UPDATE attendance_records
                        SET status=%s
                        WHERE attendance_id=%s AND status NOT IN (%s, %s)
                        """,
                        (rewrite.status.value, int(rewrite.attendance_id), *sticky),
                    )
        except Exception as e:
            if is_duplicate_key(e):
                raise StoreConflict(
                    f"{record.type.value} already stored for employee {record.employee_id} on {record.work_date}"
                ) from e
            raise

        return replace(record, attendance_id=attendance_id)
