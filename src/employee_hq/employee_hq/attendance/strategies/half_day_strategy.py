from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy


class HalfDayStrategy(CheckOutStrategy):
    """Short session, whatever the arrival time was."""

    def decide(self, *, elapsed_hours: float, current: AttendanceStatus) -> AttendanceStatus:
        return AttendanceStatus.HALF_DAY
