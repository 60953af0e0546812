from __future__ import annotations

from enum import Enum


class AttendanceType(str, Enum):
    """Logical direction of an attendance record."""

    CHECK_IN = "check-in"
    CHECK_OUT = "check-out"


class AttendanceStatus(str, Enum):
    """Attendance status stored on each record."""

    PRESENT = "present"
    LATE = "late"
    HALF_DAY = "half-day"
    ON_LEAVE = "on-leave"


# Statuses a check-out never rewrites on the matching check-in record.
STICKY_STATUSES = frozenset({AttendanceStatus.LATE, AttendanceStatus.ON_LEAVE})


class Direction(str, Enum):
    """Direction codes reported by the biometric device."""

    CHECK_IN = "1"
    BREAK_OUT = "2"
    BREAK_IN = "3"
    CHECK_OUT = "4"

    @property
    def logical_type(self) -> AttendanceType:
        if self in (Direction.CHECK_IN, Direction.BREAK_IN):
            return AttendanceType.CHECK_IN
        return AttendanceType.CHECK_OUT

    @property
    def label(self) -> str:
        return {
            Direction.CHECK_IN: "CHECK-IN",
            Direction.BREAK_OUT: "BREAK-OUT (treated as CHECK-OUT)",
            Direction.BREAK_IN: "BREAK-IN (treated as CHECK-IN)",
            Direction.CHECK_OUT: "CHECK-OUT",
        }[self]


class LeaveStatus(str, Enum):
    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"


class LeaveType(str, Enum):
    ANNUAL = "annual"
    CASUAL = "casual"
    SICK = "sick"
    MATERNITY = "maternity"
    STUDY = "study"
    OFFICIAL_ASSIGNMENT = "official-assignment"
    HALF_DAY = "half-day"


class RosterStatus(str, Enum):
    """Lifecycle of a monthly roster: draft -> published -> archived."""

    DRAFT = "draft"
    PUBLISHED = "published"
    ARCHIVED = "archived"


class EmployeeStatus(str, Enum):
    ACTIVE = "active"
    INACTIVE = "inactive"
