from __future__ import annotations

from dataclasses import dataclass
from types import ModuleType
from typing import Any

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.store import AttendanceRecordStore
from .core.constants import DEFAULT_DEDUP_WINDOW_SIZE, DEFAULT_DUPLICATE_TOLERANCE_MINUTES, DEFAULT_TIMEZONE
from .database.connection import DatabaseConnection
from .devices.validator import EventValidator
from .devices.window import RecentEventWindow
from .employees.mysql_employee_repository import MySQLEmployeeRepository
from .facilities.mysql_facility_repository import MySQLFacilityRepository
from .leaves.mysql_leave_repository import MySQLLeaveRepository
from .leaves.service import LeaveService
from .rosters.mysql_roster_repository import MySQLRosterRepository
from .rosters.service import RosterService
from .shifts.mysql_shift_repository import MySQLShiftRepository
from .shifts.resolver import ShiftResolver


@dataclass(frozen=True)
class Container:
    conn: Any

    facilities_repo: Any
    employees_repo: Any
    shifts_repo: Any
    rosters_repo: Any
    leaves_repo: Any
    attendance_repo: Any

    event_validator: EventValidator
    attendance_store: AttendanceRecordStore
    roster_service: RosterService
    shift_resolver: ShiftResolver
    leave_service: LeaveService
    attendance_service: AttendanceService


def wire(
    *,
    facilities_repo,
    employees_repo,
    shifts_repo,
    rosters_repo,
    leaves_repo,
    attendance_repo,
    conn=None,
    dedup_window_size: int = DEFAULT_DEDUP_WINDOW_SIZE,
    duplicate_tolerance_minutes: int = DEFAULT_DUPLICATE_TOLERANCE_MINUTES,
    default_timezone: str = DEFAULT_TIMEZONE,
) -> Container:
    """Build services on top of any set of repositories (MySQL or in-memory)."""
    event_validator = EventValidator(RecentEventWindow(dedup_window_size))
    attendance_store = AttendanceRecordStore(attendance_repo, tolerance_minutes=duplicate_tolerance_minutes)
    roster_service = RosterService(rosters_repo, shifts_repo, employees_repo)
    shift_resolver = ShiftResolver(roster_service, shifts_repo)
    leave_service = LeaveService(leaves_repo)
    attendance_service = AttendanceService(
        attendance_store,
        employees_repo,
        facilities_repo,
        shift_resolver,
        leave_service,
        strategy_factory=AttendanceStrategyFactory(),
        default_timezone=default_timezone,
    )

    return Container(
        conn=conn,
        facilities_repo=facilities_repo,
        employees_repo=employees_repo,
        shifts_repo=shifts_repo,
        rosters_repo=rosters_repo,
        leaves_repo=leaves_repo,
        attendance_repo=attendance_repo,
        event_validator=event_validator,
        attendance_store=attendance_store,
        roster_service=roster_service,
        shift_resolver=shift_resolver,
        leave_service=leave_service,
        attendance_service=attendance_service,
    )


def build_container(*, db_config: dict, settings: ModuleType | None = None) -> Container:
    conn = DatabaseConnection.from_settings(db_config)

    return wire(
        conn=conn,
        facilities_repo=MySQLFacilityRepository(conn),
        employees_repo=MySQLEmployeeRepository(conn),
        shifts_repo=MySQLShiftRepository(conn),
        rosters_repo=MySQLRosterRepository(conn),
        leaves_repo=MySQLLeaveRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        dedup_window_size=int(getattr(settings, "DEDUP_WINDOW_SIZE", DEFAULT_DEDUP_WINDOW_SIZE)),
        duplicate_tolerance_minutes=int(
            getattr(settings, "DUPLICATE_TOLERANCE_MINUTES", DEFAULT_DUPLICATE_TOLERANCE_MINUTES)
        ),
        default_timezone=str(getattr(settings, "DEFAULT_TIMEZONE", DEFAULT_TIMEZONE)),
    )
