from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Optional

from ..common.datetime_utils import now_utc
from ..core.enums import RosterStatus
from ..core.exceptions import ValidationError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from ..shifts.model import Shift
from ..shifts.repository import ShiftRepository
from .model import MonthlyRoster
from .repository import RosterRepository

logger = logging.getLogger(__name__)


class RosterService:
    def __init__(self, rosters: RosterRepository, shifts: ShiftRepository, employees: EmployeeRepository):
        self._rosters = rosters
        self._shifts = shifts
        self._employees = employees

    def shift_for_employee(self, employee: Employee, work_date: date) -> Optional[Shift]:
        roster = self._rosters.find_published_for(
            facility_id=employee.facility_id,
            employee_id=employee.employee_id,
            work_date=work_date,
        )
        if not roster or not roster.is_authoritative_for(work_date):
            return None

        shift_id = roster.shift_id_for(employee.employee_id)
        if shift_id is None:
            return None
        return self._shifts.get_by_id(shift_id)

    def get_published_shift_for(self, employee_id: int, work_date: date) -> Optional[Shift]:
        employee = self._employees.get_by_id(int(employee_id))
        if not employee:
            return None
        return self.shift_for_employee(employee, work_date)

    def _require(self, roster_id: int) -> MonthlyRoster:
        roster = self._rosters.get_by_id(int(roster_id))
        if not roster:
            raise ValidationError(f"Roster {roster_id} does not exist")
        return roster

    def publish(self, roster_id: int, *, now: datetime | None = None) -> MonthlyRoster:
        """Publish a roster and propagate its assignments to employee default shifts.

        Re-publishing a published roster re-applies the assignments.
        """
        roster = self._require(roster_id)
        if roster.status == RosterStatus.ARCHIVED:
            raise ValidationError("An archived roster cannot be published")

        if not self._rosters.publish(roster_id=roster.roster_id, published_at=now or now_utc()):
            raise ValidationError("Publishing the roster failed")

        logger.info(
            "Published roster %s (%s, facility %s): %d assignment(s) applied",
            roster.roster_id,
            roster.month,
            roster.facility_id,
            len(roster.assignments),
        )
        return self._require(roster.roster_id)

    def archive(self, roster_id: int) -> MonthlyRoster:
        roster = self._require(roster_id)
        if roster.status != RosterStatus.ARCHIVED:
            if not self._rosters.set_status(roster_id=roster.roster_id, status=RosterStatus.ARCHIVED):
                raise ValidationError("Archiving the roster failed")
            logger.info("Archived roster %s (%s)", roster.roster_id, roster.month)
        return self._require(roster.roster_id)
