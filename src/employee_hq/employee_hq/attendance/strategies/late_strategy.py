from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy


class LateStrategy(CheckInStrategy):
    """Check-in after the cutoff hour."""

    def decide(self, *, now: datetime) -> AttendanceStatus:
        return AttendanceStatus.LATE
