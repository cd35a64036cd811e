from __future__ import annotations

from abc import ABC, abstractmethod
from datetime import datetime

from ...core.enums import AttendanceStatus


class CheckInStrategy(ABC):
    """Decides the status a day starts with."""

    @abstractmethod
    def decide(self, *, now: datetime) -> AttendanceStatus:
        raise NotImplementedError


class CheckOutStrategy(ABC):
    """Decides what closing the session turns the day's status into."""

    @abstractmethod
    def decide(self, *, elapsed_hours: float, current: AttendanceStatus) -> AttendanceStatus:
        raise NotImplementedError
