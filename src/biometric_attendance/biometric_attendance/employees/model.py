from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.enums import EmployeeStatus


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    `shift_id` is the default shift; roster publication overwrites it.
    `device_person_id` is the subject id the biometric device reports (personSn).
    """

    employee_id: int
    staff_id: str
    full_name: str
    facility_id: int
    shift_id: Optional[int]
    device_person_id: Optional[str]
    status: EmployeeStatus = EmployeeStatus.ACTIVE

    @property
    def is_active(self) -> bool:
        return self.status == EmployeeStatus.ACTIVE
