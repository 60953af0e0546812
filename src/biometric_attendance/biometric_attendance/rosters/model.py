from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Optional, Tuple

from ..core.enums import RosterStatus


@dataclass(frozen=True)
class RosterAssignment:
    employee_id: int
    shift_id: int
    note: Optional[str] = None


@dataclass(frozen=True)
class MonthlyRoster:
    """Domain entity: employee -> shift assignments for one facility and month.

    Only a published roster whose effective window contains a date is
    authoritative for that date.
    """

    roster_id: int
    facility_id: int
    month: str  # YYYY-MM
    name: str
    status: RosterStatus
    effective_from: date
    effective_to: date
    assignments: Tuple[RosterAssignment, ...] = field(default_factory=tuple)
    published_at: Optional[datetime] = None

    def covers(self, work_date: date) -> bool:
        return self.effective_from <= work_date <= self.effective_to

    def is_authoritative_for(self, work_date: date) -> bool:
        return self.status == RosterStatus.PUBLISHED and self.covers(work_date)

    def shift_id_for(self, employee_id: int) -> Optional[int]:
        for assignment in self.assignments:
            if assignment.employee_id == employee_id:
                return assignment.shift_id
        return None
