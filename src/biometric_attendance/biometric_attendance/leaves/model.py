from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus, LeaveType


@dataclass(frozen=True)
class LeaveRequest:
    request_id: int
    employee_id: int
    start_date: date
    end_date: date
    leave_type: LeaveType
    status: LeaveStatus
    reason: Optional[str] = None

    def covers(self, work_date: date) -> bool:
        return self.start_date <= work_date <= self.end_date

    @property
    def is_half_day(self) -> bool:
        return self.leave_type == LeaveType.HALF_DAY
