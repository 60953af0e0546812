from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol

from ..core.enums import RosterStatus
from .model import MonthlyRoster


class RosterRepository(Protocol):
    def get_by_id(self, roster_id: int) -> Optional[MonthlyRoster]:
        raise NotImplementedError

    def find_published_for(self, *, facility_id: int, employee_id: int, work_date: date) -> Optional[MonthlyRoster]:
        """Published roster of the facility covering the date and assigning the employee."""

        raise NotImplementedError

    def publish(self, *, roster_id: int, published_at: datetime) -> bool:
        """Mark the roster published and copy every assignment's shift onto the employee.

        Must be a single transaction: a reader never sees the roster published
        with employees still on their old default shift, or the reverse.
        """

        raise NotImplementedError

    def set_status(self, *, roster_id: int, status: RosterStatus) -> bool:
        raise NotImplementedError
