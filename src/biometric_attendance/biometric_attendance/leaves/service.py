from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import LeaveStatus
from .model import LeaveRequest
from .repository import LeaveRepository


class LeaveService:
    """Read side of leave management used by the attendance engine."""

    def __init__(self, leaves: LeaveRepository):
        self._leaves = leaves

    def has_approved_leave(self, employee_id: int, work_date: date) -> Optional[LeaveRequest]:
        leave = self._leaves.find_approved_covering(employee_id=int(employee_id), work_date=work_date)
        if leave and leave.status == LeaveStatus.APPROVED and leave.covers(work_date):
            return leave
        return None
