from __future__ import annotations

from typing import Any, Dict, Optional

from ..core.enums import EmployeeStatus
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "employee_id, staff_id, full_name, facility_id, shift_id, device_person_id, status"


def _row_to_employee(r: Dict[str, Any]) -> Employee:
    return Employee(
        employee_id=int(r["employee_id"]),
        staff_id=r["staff_id"],
        full_name=r["full_name"],
        facility_id=int(r["facility_id"]),
        shift_id=int(r["shift_id"]) if r.get("shift_id") is not None else None,
        device_person_id=r.get("device_person_id"),
        status=EmployeeStatus(r["status"]),
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE employee_id=%s", (int(employee_id),))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None

    def get_by_device_person_id(self, device_person_id: str) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE device_person_id=%s", (device_person_id,))
            r = fetchone(cur)
            return _row_to_employee(r) if r else None
