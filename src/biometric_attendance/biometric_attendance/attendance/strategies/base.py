from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ...common.datetime_utils import whole_minutes_between
from ...core.enums import AttendanceStatus
from ...leaves.model import LeaveRequest
from ...shifts.model import Shift
from ..model import AttendanceRecord


@dataclass(frozen=True)
class StatusDecision:
    status: AttendanceStatus
    late_arrival_minutes: int = 0
    work_duration_minutes: int = 0
    overtime_minutes: int = 0
    undertime_minutes: int = 0
    leave_id: Optional[int] = None
    # Status the same-day check-in should take, subject to the sticky rule.
    check_in_status: Optional[AttendanceStatus] = None


def work_minutes(check_in: AttendanceRecord, timestamp: datetime) -> int:
    return max(0, whole_minutes_between(check_in.timestamp, timestamp))


class CheckInStrategy(ABC):
    """Strategy Pattern: decide the status of a check-in."""

    @abstractmethod
    def decide_checkin(
        self,
        *,
        timestamp: datetime,
        scheduled: datetime,
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Strategy Pattern: decide the status of a check-out and its effect on the check-in."""

    @abstractmethod
    def decide_checkout(
        self,
        *,
        timestamp: datetime,
        check_in: Optional[AttendanceRecord],
        shift: Shift,
        leave: Optional[LeaveRequest],
    ) -> StatusDecision:
        raise NotImplementedError
