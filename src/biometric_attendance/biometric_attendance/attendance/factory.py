from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from typing import Optional

from ..common.datetime_utils import whole_minutes_between
from ..core.constants import WORK_DURATION_TOLERANCE_MINUTES
from ..leaves.model import LeaveRequest
from ..shifts.model import Shift
from .model import AttendanceRecord
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.half_day_strategy import HalfDayStrategy, OrphanCheckOutStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.leave_strategy import LeaveStrategy
from .strategies.normal_strategy import FullDayStrategy, OnTimeStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose appropriate strategy based on rules.

    Approved leave always wins over lateness and worked duration.
    """

    tolerance_minutes: int = WORK_DURATION_TOLERANCE_MINUTES

    def for_checkin(
        self,
        *,
        timestamp: datetime,
        scheduled: datetime,
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> CheckInStrategy:
        if leave:
            return LeaveStrategy()

        # Strictly after the grace deadline; arriving exactly on it is on time.
        if timestamp > scheduled + timedelta(minutes=shift.grace_minutes):
            return LateStrategy()
        return OnTimeStrategy()

    def for_checkout(
        self,
        *,
        timestamp: datetime,
        check_in: Optional[AttendanceRecord],
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> CheckOutStrategy:
        if leave:
            return LeaveStrategy()
        if check_in is None:
            return OrphanCheckOutStrategy()

        worked = max(0, whole_minutes_between(check_in.timestamp, timestamp))
        if worked * 2 < shift.expected_minutes:
            return HalfDayStrategy()
        return FullDayStrategy(self.tolerance_minutes)
