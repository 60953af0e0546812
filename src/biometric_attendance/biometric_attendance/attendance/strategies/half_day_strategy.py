from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...leaves.model import LeaveRequest
from ...shifts.model import Shift
from ..model import AttendanceRecord
from .base import CheckOutStrategy, StatusDecision, work_minutes


class HalfDayStrategy(CheckOutStrategy):
    """Worked less than half the expected hours: the whole day becomes a half-day."""

    def decide_checkout(
        self,
        *,
        timestamp: datetime,
        check_in: Optional[AttendanceRecord],
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        worked = work_minutes(check_in, timestamp) if check_in else 0
        return StatusDecision(
            status=AttendanceStatus.HALF_DAY,
            work_duration_minutes=worked,
            undertime_minutes=max(0, shift.expected_minutes - worked),
            check_in_status=AttendanceStatus.HALF_DAY,
        )


class OrphanCheckOutStrategy(CheckOutStrategy):
    """Check-out with no check-in that day: an incomplete day, not an error."""

    def decide_checkout(
        self,
        *,
        timestamp: datetime,
        check_in: Optional[AttendanceRecord],
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        return StatusDecision(status=AttendanceStatus.HALF_DAY)
