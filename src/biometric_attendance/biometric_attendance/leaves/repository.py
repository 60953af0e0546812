from __future__ import annotations

from datetime import date
from typing import Optional, Protocol

from .model import LeaveRequest


class LeaveRepository(Protocol):
    def find_approved_covering(self, *, employee_id: int, work_date: date) -> Optional[LeaveRequest]:
        raise NotImplementedError
