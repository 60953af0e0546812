from __future__ import annotations

import logging
from datetime import date

from ..core.exceptions import NoShiftAssigned
from ..employees.model import Employee
from ..rosters.service import RosterService
from .model import Shift
from .repository import ShiftRepository

logger = logging.getLogger(__name__)


class ShiftResolver:
    """Pick the single shift in effect for an employee on a calendar day.

    A published roster covering the day wins; otherwise the employee's
    default shift applies.
    """

    def __init__(self, rosters: RosterService, shifts: ShiftRepository):
        self._rosters = rosters
        self._shifts = shifts

    def resolve(self, employee: Employee, work_date: date) -> Shift:
        shift = self._rosters.shift_for_employee(employee, work_date)
        if shift:
            logger.debug("Roster shift %s applies to %s on %s", shift.code, employee.staff_id, work_date)
            return shift

        if employee.shift_id:
            shift = self._shifts.get_by_id(employee.shift_id)
            if shift:
                return shift

        raise NoShiftAssigned(f"No shift assigned to {employee.full_name} ({employee.staff_id}) on {work_date}")
