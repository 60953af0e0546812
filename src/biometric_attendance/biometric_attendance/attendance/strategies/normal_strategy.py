from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.constants import WORK_DURATION_TOLERANCE_MINUTES
from ...core.enums import AttendanceStatus
from ...leaves.model import LeaveRequest
from ...shifts.model import Shift
from ..model import AttendanceRecord
from .base import CheckInStrategy, CheckOutStrategy, StatusDecision, work_minutes


class OnTimeStrategy(CheckInStrategy):
    """Check-in no later than the grace deadline."""

    def decide_checkin(self, *, timestamp: datetime, scheduled: datetime, shift: Shift, leave: Optional[LeaveRequest]) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.PRESENT)


class FullDayStrategy(CheckOutStrategy):
    """Check-out after at least half the expected hours.

    Overtime or undertime is recorded outside the tolerance band; the check-in
    status is left alone.
    """

    def __init__(self, tolerance_minutes: int = WORK_DURATION_TOLERANCE_MINUTES):
        self._tolerance = int(tolerance_minutes)

    def decide_checkout(
        self,
        *,
        timestamp: datetime,
        check_in: Optional[AttendanceRecord],
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        worked = work_minutes(check_in, timestamp) if check_in else 0
        expected = shift.expected_minutes

        overtime = undertime = 0
        if worked > expected + self._tolerance:
            overtime = worked - expected
        elif worked < expected - self._tolerance:
            undertime = expected - worked

        return StatusDecision(
            status=AttendanceStatus.PRESENT,
            work_duration_minutes=worked,
            overtime_minutes=overtime,
            undertime_minutes=undertime,
        )
