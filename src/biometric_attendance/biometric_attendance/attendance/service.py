from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Tuple

from ..common.datetime_utils import local_work_date, overnight_cutoff, resolve_zone, scheduled_window
from ..core.constants import DEFAULT_TIMEZONE
from ..core.enums import STICKY_STATUSES, AttendanceType, Direction
from ..core.exceptions import NoEmployeeMatch, NoShiftAssigned
from ..devices.events import DeviceEvent
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..facilities.repository import FacilityRepository
from ..leaves.service import LeaveService
from ..shifts.model import Shift
from ..shifts.resolver import ShiftResolver
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, StatusRewrite
from .store import AttendanceRecordStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ProcessingResult:
    record: AttendanceRecord
    duplicate: bool
    message: str


class AttendanceService:
    """Turns accepted device events into attendance records.

    Raises NoEmployeeMatch / NoShiftAssigned for events that cannot be
    attributed, PersistenceFailure when the store is unavailable.
    """

    def __init__(
        self,
        store: AttendanceRecordStore,
        employees: EmployeeRepository,
        facilities: FacilityRepository,
        resolver: ShiftResolver,
        leaves: LeaveService,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        default_timezone: str = DEFAULT_TIMEZONE,
    ):
        self._store = store
        self._employees = employees
        self._facilities = facilities
        self._resolver = resolver
        self._leaves = leaves
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._default_timezone = default_timezone

    def _match_employee(self, event: DeviceEvent) -> Employee:
        employee = self._employees.get_by_device_person_id(event.person_sn)
        if not employee:
            raise NoEmployeeMatch(f"No employee registered for device person {event.person_sn}")
        if not employee.is_active:
            raise NoEmployeeMatch(f"Employee {employee.staff_id} is not active")
        return employee

    def _zone_for(self, employee: Employee):
        facility = self._facilities.get_by_id(employee.facility_id)
        return resolve_zone(facility.timezone if facility else None, default=self._default_timezone)

    def _work_day(self, employee: Employee, instant: datetime, tz: tzinfo) -> Tuple[date, Shift]:
        """Day bucket and shift for a scan.

        Scans after midnight that still fall in the previous day's overnight
        shift belong to that previous day.
        """
        calendar_day = local_work_date(instant, tz)
        previous_day = calendar_day - timedelta(days=1)
        try:
            previous_shift = self._resolver.resolve(employee, previous_day)
        except NoShiftAssigned:
            previous_shift = None

        if previous_shift is not None:
            cutoff = overnight_cutoff(previous_day, previous_shift.start_time, previous_shift.end_time, tz)
            if cutoff is not None and instant < cutoff:
                return previous_day, previous_shift

        return calendar_day, self._resolver.resolve(employee, calendar_day)

    def process_event(self, event: DeviceEvent) -> ProcessingResult:
        employee = self._match_employee(event)
        tz = self._zone_for(employee)
        work_date, shift = self._work_day(employee, event.timestamp, tz)

        # A redelivered event may have been re-filed under another type.
        earlier = self._store.find_by_source_event(employee.employee_id, work_date, event.record_id)
        if earlier:
            logger.info("Event %s already recorded as attendance %s", event.record_id, earlier.attendance_id)
            return ProcessingResult(record=earlier, duplicate=True, message="Attendance already recorded")

        check_in = self._store.latest_check_in(employee.employee_id, work_date)
        attendance_type = event.logical_type
        if event.direction == Direction.BREAK_OUT and check_in is None:
            logger.info("Break-out %s without a check-in for %s, recording it as a check-in", event.record_id, employee.staff_id)
            attendance_type = AttendanceType.CHECK_IN

        leave = self._leaves.has_approved_leave(employee.employee_id, work_date)
        scheduled_in, scheduled_out = scheduled_window(work_date, shift.start_time, shift.end_time, tz)

        if attendance_type == AttendanceType.CHECK_IN:
            strategy = self._factory.for_checkin(timestamp=event.timestamp, scheduled=scheduled_in, shift=shift, leave=leave)
            decision = strategy.decide_checkin(timestamp=event.timestamp, scheduled=scheduled_in, shift=shift, leave=leave)
        else:
            strategy = self._factory.for_checkout(timestamp=event.timestamp, check_in=check_in, shift=shift, leave=leave)
            decision = strategy.decide_checkout(timestamp=event.timestamp, check_in=check_in, shift=shift, leave=leave)

        record = AttendanceRecord(
            attendance_id=None,
            employee_id=employee.employee_id,
            facility_id=employee.facility_id,
            shift_id=shift.shift_id,
            work_date=work_date,
            type=attendance_type,
            timestamp=event.timestamp,
            status=decision.status,
            late_arrival_minutes=decision.late_arrival_minutes,
            work_duration_minutes=decision.work_duration_minutes,
            overtime_minutes=decision.overtime_minutes,
            undertime_minutes=decision.undertime_minutes,
            source_event_id=event.record_id,
            leave_id=decision.leave_id,
            scheduled_check_in=scheduled_in,
            scheduled_check_out=scheduled_out,
            device_key=event.device_key,
            verification_methods=event.verification_methods,
            raw_payload=dict(event.raw),
        )

        rewrite: Optional[StatusRewrite] = None
        if (
            attendance_type == AttendanceType.CHECK_OUT
            and check_in is not None
            and decision.check_in_status is not None
            and check_in.status not in STICKY_STATUSES
            and check_in.status != decision.check_in_status
        ):
            rewrite = StatusRewrite(attendance_id=check_in.attendance_id, status=decision.check_in_status)

        result = self._store.save(record, rewrite=rewrite)
        if result.duplicate:
            return ProcessingResult(record=result.record, duplicate=True, message="Attendance already recorded")

        logger.info(
            "Recorded %s for %s on %s: %s (late=%d, worked=%d, overtime=%d, undertime=%d)",
            attendance_type.value,
            employee.staff_id,
            work_date,
            decision.status.value,
            decision.late_arrival_minutes,
            decision.work_duration_minutes,
            decision.overtime_minutes,
            decision.undertime_minutes,
        )
        return ProcessingResult(record=result.record, duplicate=False, message="Attendance recorded")

