from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord, AttendanceWithProfile


class AttendanceRepository(Protocol):
    """Record store contract for attendance rows.

    Implementations must enforce one row per (user_id, work_date) and raise
    UniqueConstraintViolation on collision; `update_checkout` must only touch
    an open row and raise NotFound otherwise.
    """

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_history_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_user_in_range(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        """Rows with start_date <= work_date < end_date."""

        raise NotImplementedError

    def get_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def get_for_date_with_profiles(self, work_date: date) -> Sequence[AttendanceWithProfile]:
        raise NotImplementedError

    def list_with_profiles(self, *, limit: Optional[int] = None) -> Sequence[AttendanceWithProfile]:
        """Newest first."""

        raise NotImplementedError

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: float,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        raise NotImplementedError

    def create_absence(self, *, user_id: str, work_date: date, notes: Optional[str] = None) -> AttendanceRecord:
        """Manager-entered absent row (no check-in)."""

        raise NotImplementedError
