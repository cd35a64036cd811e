from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_LATE_CUTOFF_HOUR
from .strategies.base import CheckInStrategy, CheckOutStrategy
from .strategies.full_day_strategy import FullDayStrategy
from .strategies.half_day_strategy import HalfDayStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.present_strategy import PresentStrategy


@dataclass
class AttendanceStrategyFactory:
    """Factory Pattern: choose the check-in / check-out rule that applies."""

    late_cutoff_hour: int = DEFAULT_LATE_CUTOFF_HOUR
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS

    def for_checkin(self, *, now: datetime) -> CheckInStrategy:
        # Only the hour is compared: anything within the cutoff hour is on time.
        if now.hour > self.late_cutoff_hour:
            return LateStrategy()
        return PresentStrategy()

    def for_checkout(self, *, elapsed_hours: float) -> CheckOutStrategy:
        if elapsed_hours < self.half_day_hours:
            return HalfDayStrategy()
        return FullDayStrategy()
