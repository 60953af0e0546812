from __future__ import annotations

from typing import Optional, Protocol

from .model import Employee


class EmployeeRepository(Protocol):
    """Repository interface for Employee.

    Note: the engine only reads employees; default-shift writes happen as part
    of roster publication (see RosterRepository.publish).
    """

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_device_person_id(self, device_person_id: str) -> Optional[Employee]:
        raise NotImplementedError
