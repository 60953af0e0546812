from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ..core.enums import AttendanceType
from .model import AttendanceRecord, StatusRewrite


class AttendanceRepository(Protocol):
    """Persistence for attendance records.

    Implementations enforce uniqueness of (employee_id, work_date, type) and
    raise StoreConflict when an insert violates it.
    """

    def find_by_source_event(self, *, employee_id: int, work_date: date, source_event_id: str) -> Optional[AttendanceRecord]:
        raise NotImplementedError

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
        """Record of that type with the same source event id or a timestamp in [start, end]."""

        raise NotImplementedError

    def latest_of_type(self, *, employee_id: int, work_date: date, type: AttendanceType) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def insert(self, record: AttendanceRecord, *, rewrite: Optional[StatusRewrite] = None) -> AttendanceRecord:
        """Insert the record and apply the check-in rewrite in the same transaction.

        The rewrite is skipped when the check-in already holds a sticky status.
        Returns the stored record (with its attendance_id).
        """

        raise NotImplementedError
