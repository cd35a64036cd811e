from __future__ import annotations

from datetime import datetime

from ...core.enums import AttendanceStatus
from .base import CheckInStrategy


class PresentStrategy(CheckInStrategy):
    """On-time check-in."""

    def decide(self, *, now: datetime) -> AttendanceStatus:
        return AttendanceStatus.PRESENT
