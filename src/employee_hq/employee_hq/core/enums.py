from __future__ import annotations

from enum import Enum


class Role(str, Enum):
    """Role used to gate the manager views."""

    EMPLOYEE = "employee"
    MANAGER = "manager"


class AttendanceStatus(str, Enum):
    """Status stored on an attendance row."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class DayStatus(str, Enum):
    """What the dashboard shows for a single day, including not-marked."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"
    NOT_MARKED = "not-marked"

    @classmethod
    def from_attendance(cls, status: AttendanceStatus) -> "DayStatus":
        return cls(status.value)


class SessionEvent(str, Enum):
    SIGNED_IN = "SIGNED_IN"
    SIGNED_OUT = "SIGNED_OUT"
    TOKEN_REFRESHED = "TOKEN_REFRESHED"
