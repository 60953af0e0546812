from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...core.enums import AttendanceStatus
from ...leaves.model import LeaveRequest
from ...shifts.model import Shift
from ..model import AttendanceRecord
from .base import CheckInStrategy, CheckOutStrategy, StatusDecision, work_minutes


class LeaveStrategy(CheckInStrategy, CheckOutStrategy):
    """Approved leave covers the day; it takes priority over lateness and duration."""

    def decide_checkin(self, *, timestamp: datetime, scheduled: datetime, shift: Shift, leave: Optional[LeaveRequest]) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.ON_LEAVE,
            late_arrival_minutes=0,
            leave_id=leave.request_id if leave else None,
        )

    def decide_checkout(
        self,
        *,
        timestamp: datetime,
        check_in: Optional[AttendanceRecord],
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        if check_in is None:
            # Orphan check-out on a leave day.
            return StatusDecision(status=AttendanceStatus.ON_LEAVE, leave_id=leave.request_id if leave else None)

        status = AttendanceStatus.HALF_DAY if leave and leave.is_half_day else AttendanceStatus.ON_LEAVE
        return StatusDecision(
            status=status,
            work_duration_minutes=work_minutes(check_in, timestamp),
            leave_id=leave.request_id if leave else None,
            check_in_status=status,
        )
