from __future__ import annotations

from ...core.enums import AttendanceStatus
from .base import CheckOutStrategy


class FullDayStrategy(CheckOutStrategy):
    """Long enough session: the status set at check-in stands (a late day stays late)."""

    def decide(self, *, elapsed_hours: float, current: AttendanceStatus) -> AttendanceStatus:
        return current
