from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, Optional, Tuple

from ..core.enums import AttendanceStatus, AttendanceType


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: one recorded check-in or check-out event.

    `work_date` is the day bucket in the facility timezone; `timestamp` is the
    exact instant of the scan. `source_event_id` is the device record id.
    """

    attendance_id: Optional[int]
    employee_id: int
    facility_id: int
    shift_id: int
    work_date: date
    type: AttendanceType
    timestamp: datetime
    status: AttendanceStatus
    late_arrival_minutes: int = 0
    work_duration_minutes: int = 0
    overtime_minutes: int = 0
    undertime_minutes: int = 0
    source_event_id: Optional[str] = None
    leave_id: Optional[int] = None
    scheduled_check_in: Optional[datetime] = None
    scheduled_check_out: Optional[datetime] = None
    device_key: Optional[str] = None
    verification_methods: Tuple[str, ...] = ()
    raw_payload: Optional[Dict[str, Any]] = field(default=None, compare=False)


@dataclass(frozen=True)
class StatusRewrite:
    """Pending change of a same-day check-in status caused by a check-out."""

    attendance_id: int
    status: AttendanceStatus
