from __future__ import annotations

import threading
from dataclasses import dataclass, field, replace
from datetime import date, datetime, time, timezone
from typing import Optional

import pytest

from src.biometric_attendance.biometric_attendance.attendance.model import AttendanceRecord, StatusRewrite
from src.biometric_attendance.biometric_attendance.container import Container, wire
from src.biometric_attendance.biometric_attendance.core.enums import (
    STICKY_STATUSES,
    AttendanceType,
    EmployeeStatus,
    LeaveStatus,
    LeaveType,
    RosterStatus,
)
from src.biometric_attendance.biometric_attendance.core.exceptions import StoreConflict
from src.biometric_attendance.biometric_attendance.employees.model import Employee
from src.biometric_attendance.biometric_attendance.facilities.model import Facility
from src.biometric_attendance.biometric_attendance.leaves.model import LeaveRequest
from src.biometric_attendance.biometric_attendance.rosters.model import MonthlyRoster, RosterAssignment
from src.biometric_attendance.biometric_attendance.shifts.model import Shift

WORK_DAY = date(2025, 3, 3)


@dataclass
class InMemoryFacilities:
    facilities: dict[int, Facility]

    def get_by_id(self, facility_id: int) -> Optional[Facility]:
        return self.facilities.get(facility_id)


@dataclass
class InMemoryEmployees:
    employees: dict[int, Employee]

    def get_by_id(self, employee_id: int) -> Optional[Employee]:
        return self.employees.get(employee_id)

    def get_by_device_person_id(self, device_person_id: str) -> Optional[Employee]:
        for e in self.employees.values():
            if e.device_person_id == device_person_id:
                return e
        return None


@dataclass
class InMemoryShifts:
    shifts: dict[int, Shift]

    def get_by_id(self, shift_id: int) -> Optional[Shift]:
        return self.shifts.get(shift_id)


@dataclass
class InMemoryRosters:
    employees: InMemoryEmployees
    rosters: dict[int, MonthlyRoster] = field(default_factory=dict)

    def get_by_id(self, roster_id: int) -> Optional[MonthlyRoster]:
        return self.rosters.get(roster_id)

    def find_published_for(self, *, facility_id: int, employee_id: int, work_date: date) -> Optional[MonthlyRoster]:
        for r in self.rosters.values():
            if r.facility_id == facility_id and r.is_authoritative_for(work_date) and r.shift_id_for(employee_id):
                return r
        return None

    def publish(self, *, roster_id: int, published_at: datetime) -> bool:
        roster = self.rosters.get(roster_id)
        if not roster:
            return False
        self.rosters[roster_id] = replace(roster, status=RosterStatus.PUBLISHED, published_at=published_at)
        for a in roster.assignments:
            employee = self.employees.employees.get(a.employee_id)
            if employee:
                self.employees.employees[a.employee_id] = replace(employee, shift_id=a.shift_id)
        return True

    def set_status(self, *, roster_id: int, status: RosterStatus) -> bool:
        roster = self.rosters.get(roster_id)
        if not roster:
            return False
        self.rosters[roster_id] = replace(roster, status=status)
        return True


@dataclass
class InMemoryLeaves:
    requests: list[LeaveRequest] = field(default_factory=list)

    def find_approved_covering(self, *, employee_id: int, work_date: date) -> Optional[LeaveRequest]:
        for r in self.requests:
            if r.employee_id == employee_id and r.status == LeaveStatus.APPROVED and r.covers(work_date):
                return r
        return None


class InMemoryAttendance:
    """Enforces (employee_id, work_date, type) uniqueness like the real table."""

    def __init__(self):
        self.records: dict[int, AttendanceRecord] = {}
        self.fail_with: Exception | None = None
        self._id = 0
        self._lock = threading.Lock()

    def _matching(self, employee_id: int, work_date: date, type: AttendanceType | None = None):
        items = [
            r
            for r in self.records.values()
            if r.employee_id == employee_id and r.work_date == work_date and (type is None or r.type == type)
        ]
        return sorted(items, key=lambda r: r.timestamp)

    def find_by_source_event(self, *, employee_id: int, work_date: date, source_event_id: str) -> Optional[AttendanceRecord]:
        for r in self._matching(employee_id, work_date):
            if r.source_event_id == source_event_id:
                return r
        return None

    def find_in_window(self, *, employee_id, work_date, type, source_event_id, start, end) -> Optional[AttendanceRecord]:
        for r in self._matching(employee_id, work_date, type):
            if (source_event_id and r.source_event_id == source_event_id) or start <= r.timestamp <= end:
                return r
        return None

    def latest_of_type(self, *, employee_id: int, work_date: date, type: AttendanceType) -> Optional[AttendanceRecord]:
        items = self._matching(employee_id, work_date, type)
        return items[-1] if items else None

    def insert(self, record: AttendanceRecord, *, rewrite: Optional[StatusRewrite] = None) -> AttendanceRecord:
        if self.fail_with is not None:
            raise self.fail_with
        with self._lock:
            if self._matching(record.employee_id, record.work_date, record.type):
                raise StoreConflict("duplicate key")
            self._id += 1
            stored = replace(record, attendance_id=self._id)
            self.records[self._id] = stored
            if rewrite is not None:
                target = self.records[rewrite.attendance_id]
                if target.status not in STICKY_STATUSES:
                    self.records[rewrite.attendance_id] = replace(target, status=rewrite.status)
            return stored

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        """Seed a record without going through the store."""
        with self._lock:
            self._id += 1
            stored = replace(record, attendance_id=self._id)
            self.records[self._id] = stored
            return stored


@dataclass
class World:
    facilities: InMemoryFacilities
    employees: InMemoryEmployees
    shifts: InMemoryShifts
    rosters: InMemoryRosters
    leaves: InMemoryLeaves
    attendance: InMemoryAttendance
    container: Container

    def records_of(self, employee_id: int, work_date: date = WORK_DAY) -> dict[AttendanceType, AttendanceRecord]:
        return {r.type: r for r in self.attendance.records.values() if r.employee_id == employee_id and r.work_date == work_date}


@pytest.fixture
def world() -> World:
    facilities = InMemoryFacilities(
        {
            1: Facility(facility_id=1, name="Lagos General", code="LGH", timezone="Africa/Lagos"),
            2: Facility(facility_id=2, name="London Annex", code="LDN", timezone="Europe/London"),
            3: Facility(facility_id=3, name="Rural Clinic", code="RCL", timezone=None),
        }
    )
    shifts = InMemoryShifts(
        {
            1: Shift(shift_id=1, name="Day", code="DAY", start_time=time(8, 0), end_time=time(16, 0), working_hours=8, grace_minutes=10),
            2: Shift(shift_id=2, name="Morning", code="MOR", start_time=time(9, 0), end_time=time(17, 0), working_hours=8, grace_minutes=15),
            3: Shift(shift_id=3, name="Night", code="NGT", start_time=time(22, 0), end_time=time(6, 0), working_hours=8, grace_minutes=15),
        }
    )
    employees = InMemoryEmployees(
        {
            1: Employee(employee_id=1, staff_id="STF-0001", full_name="Ada Obi", facility_id=1, shift_id=1, device_person_id="1001"),
            2: Employee(employee_id=2, staff_id="STF-0002", full_name="Sam Reid", facility_id=2, shift_id=1, device_person_id="2002"),
            3: Employee(employee_id=3, staff_id="STF-0003", full_name="Tolu Ade", facility_id=1, shift_id=None, device_person_id="3003"),
            4: Employee(
                employee_id=4,
                staff_id="STF-0004",
                full_name="Kemi Bello",
                facility_id=1,
                shift_id=1,
                device_person_id="4004",
                status=EmployeeStatus.INACTIVE,
            ),
            5: Employee(employee_id=5, staff_id="STF-0005", full_name="Musa Bala", facility_id=3, shift_id=1, device_person_id="5005"),
        }
    )
    rosters = InMemoryRosters(employees)
    leaves = InMemoryLeaves()
    attendance = InMemoryAttendance()

    container = wire(
        facilities_repo=facilities,
        employees_repo=employees,
        shifts_repo=shifts,
        rosters_repo=rosters,
        leaves_repo=leaves,
        attendance_repo=attendance,
        dedup_window_size=100,
        duplicate_tolerance_minutes=5,
        default_timezone="Africa/Lagos",
    )
    return World(facilities, employees, shifts, rosters, leaves, attendance, container)


def epoch_millis(instant: datetime) -> str:
    return str(int(instant.timestamp() * 1000))


@pytest.fixture
def make_payload():
    """Build a webhook payload for a scan at an aware datetime."""

    def _make(record_id, when: datetime, *, direction="1", person_sn="1001", **overrides):
        payload = {
            "recordId": str(record_id),
            "deviceKey": "XO5-LGH-01",
            "recordTime": epoch_millis(when),
            "recordTimeStr": when.astimezone(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
            "personSn": person_sn,
            "resultFlag": "1",
            "personType": "1",
            "direction": direction,
            "faceFlag": "1",
            "fingerFlag": "0",
            "cardFlag": "0",
            "pwdFlag": "0",
        }
        payload.update(overrides)
        return payload

    return _make


@pytest.fixture
def work_day() -> date:
    return WORK_DAY


@pytest.fixture
def leave_request():
    """Build a leave request covering the work day by default."""

    def _make(request_id: int, employee_id: int, *, leave_type=LeaveType.ANNUAL, status=LeaveStatus.APPROVED, start=WORK_DAY, end=WORK_DAY):
        return LeaveRequest(
            request_id=request_id,
            employee_id=employee_id,
            start_date=start,
            end_date=end,
            leave_type=leave_type,
            status=status,
        )

    return _make


@pytest.fixture
def roster():
    """Build a March roster; assignments are (employee_id, shift_id) pairs."""

    def _make(roster_id: int, *, status=RosterStatus.PUBLISHED, facility_id=1, assignments=((1, 2),), start=date(2025, 3, 1), end=date(2025, 3, 31)):
        return MonthlyRoster(
            roster_id=roster_id,
            facility_id=facility_id,
            month="2025-03",
            name="March duty roster",
            status=status,
            effective_from=start,
            effective_to=end,
            assignments=tuple(RosterAssignment(employee_id=e, shift_id=s) for e, s in assignments),
        )

    return _make


