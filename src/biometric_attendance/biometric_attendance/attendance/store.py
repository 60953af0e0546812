from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Optional

from ..core.constants import DEFAULT_DUPLICATE_TOLERANCE_MINUTES
from ..core.enums import AttendanceType
from ..core.exceptions import DomainError, PersistenceFailure, StoreConflict
from .model import AttendanceRecord, StatusRewrite
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SaveResult:
    """Outcome of AttendanceRecordStore.save: stored, or the existing duplicate."""

    record: AttendanceRecord
    duplicate: bool = False


class AttendanceRecordStore:
    """At-most-once recording of attendance events.

    A record with the same employee, day and type that carries the same source
    event id, or a timestamp within the tolerance window, is the same physical
    event. The repository's uniqueness constraint settles races between
    concurrent deliveries; the loser gets the winner back.
    """

    def __init__(self, repository: AttendanceRepository, *, tolerance_minutes: int = DEFAULT_DUPLICATE_TOLERANCE_MINUTES):
        self._repo = repository
        self._tolerance = timedelta(minutes=int(tolerance_minutes))

    def _guard(self, operation: str, fn, *args, **kwargs):
        try:
            return fn(*args, **kwargs)
        except DomainError:
            raise
        except Exception as e:
            raise PersistenceFailure(f"Attendance store {operation} failed: {e}") from e

    def latest_check_in(self, employee_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return self._guard(
            "read",
            self._repo.latest_of_type,
            employee_id=employee_id,
            work_date=work_date,
            type=AttendanceType.CHECK_IN,
        )

    def find_by_source_event(self, employee_id: int, work_date: date, source_event_id: str) -> Optional[AttendanceRecord]:
        return self._guard(
            "read",
            self._repo.find_by_source_event,
            employee_id=employee_id,
            work_date=work_date,
            source_event_id=source_event_id,
        )

    def find_existing(self, record: AttendanceRecord) -> Optional[AttendanceRecord]:
        return self._guard(
            "read",
            self._repo.find_in_window,
            employee_id=record.employee_id,
            work_date=record.work_date,
            type=record.type,
            source_event_id=record.source_event_id,
            start=record.timestamp - self._tolerance,
            end=record.timestamp + self._tolerance,
        )

    def save(self, record: AttendanceRecord, *, rewrite: Optional[StatusRewrite] = None) -> SaveResult:
        existing = self.find_existing(record)
        if existing:
            logger.info(
                "Duplicate %s skipped for employee %s on %s (record %s)",
                record.type.value,
                record.employee_id,
                record.work_date,
                record.source_event_id,
            )
            return SaveResult(record=existing, duplicate=True)

        try:
            stored = self._guard("insert", self._repo.insert, record, rewrite=rewrite)
        except StoreConflict:
            winner = self._guard(
                "read",
                self._repo.latest_of_type,
                employee_id=record.employee_id,
                work_date=record.work_date,
                type=record.type,
            )
            if winner is None:
                raise PersistenceFailure(
                    f"Uniqueness conflict for employee {record.employee_id} on {record.work_date} but no record found"
                )
            logger.info(
                "Duplicate %s detected during save for employee %s on %s",
                record.type.value,
                record.employee_id,
                record.work_date,
            )
            return SaveResult(record=winner, duplicate=True)

        if rewrite is not None:
            logger.info("Check-in %s set to %s by check-out %s", rewrite.attendance_id, rewrite.status.value, stored.attendance_id)
        return SaveResult(record=stored)
