from __future__ import annotations

from datetime import datetime
from typing import Optional

from ...common.datetime_utils import whole_minutes_between
from ...core.enums import AttendanceStatus
from ...leaves.model import LeaveRequest
from ...shifts.model import Shift
from .base import CheckInStrategy, StatusDecision


class LateStrategy(CheckInStrategy):
    """Late check-in. Minutes count from the scheduled start, not the grace deadline."""

    def decide_checkin(self, *, timestamp: datetime, scheduled: datetime, shift: Shift, leave: Optional[LeaveRequest]) -> StatusDecision:
        return StatusDecision(
            status=AttendanceStatus.LATE,
            late_arrival_minutes=whole_minutes_between(scheduled, timestamp),
        )
