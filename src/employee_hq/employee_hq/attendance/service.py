from __future__ import annotations

import logging
from datetime import date, datetime, tzinfo
from typing import Optional, Sequence

from ..common.datetime_utils import elapsed_hours, now_local, to_business_time
from ..core.constants import DEFAULT_RECENT_LIMIT
from ..core.enums import DayStatus, Role
from ..core.exceptions import (
    AlreadyCheckedIn,
    AuthorizationError,
    ConstraintViolation,
    NoActiveCheckIn,
    NotFound,
    UniqueConstraintViolation,
    ValidationError,
)
from ..profiles.repository import ProfileRepository
from .factory import AttendanceStrategyFactory
from .model import AttendanceRecord, TodayStatus
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: check in, check out and read back one employee's days."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        *,
        strategy_factory: AttendanceStrategyFactory | None = None,
        tz: tzinfo | None = None,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._factory = strategy_factory or AttendanceStrategyFactory()
        self._tz = tz

    def _now(self, now: datetime | None) -> datetime:
        # Whole seconds: the stored DATETIME must equal the value that was classified.
        return to_business_time(now or now_local(self._tz), self._tz).replace(microsecond=0)

    def _require_profile(self, user_id: str, message: str) -> None:
        if self._profiles.get_by_id(user_id) is None:
            raise ValidationError(message)

    def today(self, now: datetime | None = None) -> date:
        return self._now(now).date()

    def check_in(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        today = now.date()
        self._require_profile(user_id, "Complete your employee profile before checking in")

        if self._attendance.get_for_user_and_date(user_id, today):
            logger.info("Rejected check-in for %s on %s: record exists", user_id, today)
            raise AlreadyCheckedIn()

        status = self._factory.for_checkin(now=now).decide(now=now)

        try:
            record = self._attendance.create_checkin(
                user_id=user_id,
                work_date=today,
                check_in_time=now,
                status=status,
            )
        except UniqueConstraintViolation as exc:
            # Lost a race with a concurrent check-in for the same day.
            logger.info("Rejected check-in for %s on %s: unique constraint", user_id, today)
            raise AlreadyCheckedIn() from exc
        except ConstraintViolation as exc:
            # Profile removed between the check above and the insert.
            raise ValidationError("Complete your employee profile before checking in") from exc

        logger.info("User %s checked in at %s as %s", user_id, now.isoformat(), record.status.value)
        return record

    def check_out(self, user_id: str, *, now: datetime | None = None) -> AttendanceRecord:
        now = self._now(now)
        today = now.date()

        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record or record.check_in_time is None:
            raise NoActiveCheckIn()
        if record.check_out_time is not None:
            raise NoActiveCheckIn("You have already checked out today")
        if now < record.check_in_time:
            raise ValidationError("Check-out time cannot be before check-in time")

        hours = elapsed_hours(record.check_in_time, now)
        status = self._factory.for_checkout(elapsed_hours=hours).decide(elapsed_hours=hours, current=record.status)

        try:
            updated = self._attendance.update_checkout(
                attendance_id=record.attendance_id,
                check_out_time=now,
                total_hours=hours,
                status=status,
            )
        except NotFound as exc:
            # Another checkout closed (or removed) the row first.
            logger.info("Rejected check-out for %s on %s: row no longer open", user_id, today)
            raise NoActiveCheckIn("You have already checked out today") from exc

        logger.info(
            "User %s checked out at %s as %s (worked %.2f h)",
            user_id,
            now.isoformat(),
            updated.status.value,
            hours,
        )
        return updated

    def classify_today(self, user_id: str, today: date | None = None) -> DayStatus:
        today = today or self.today()
        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            return DayStatus.NOT_MARKED
        return DayStatus.from_attendance(record.status)

    def get_today_status(self, user_id: str, today: date | None = None) -> TodayStatus:
        today = today or self.today()
        record = self._attendance.get_for_user_and_date(user_id, today)
        if not record:
            return TodayStatus(status=DayStatus.NOT_MARKED)
        return TodayStatus(
            status=DayStatus.from_attendance(record.status),
            check_in_time=record.check_in_time,
            check_out_time=record.check_out_time,
            total_hours=record.total_hours,
        )

    def get_recent(self, user_id: str, *, limit: int = DEFAULT_RECENT_LIMIT) -> Sequence[AttendanceRecord]:
        return self._attendance.get_recent_for_user(user_id, limit)

    def get_history(self, user_id: str) -> Sequence[AttendanceRecord]:
        return self._attendance.get_history_for_user(user_id)

    def mark_absent(
        self,
        *,
        current_role: Role,
        user_id: str,
        work_date: date,
        notes: Optional[str] = None,
    ) -> AttendanceRecord:
        """Manager-entered absence: the only status set without a check-in."""

        if current_role != Role.MANAGER:
            raise AuthorizationError("Only managers can mark absences")
        self._require_profile(user_id, "Unknown employee")

        if self._attendance.get_for_user_and_date(user_id, work_date):
            raise ValidationError("Attendance is already recorded for this day")

        try:
            record = self._attendance.create_absence(user_id=user_id, work_date=work_date, notes=notes)
        except UniqueConstraintViolation as exc:
            raise ValidationError("Attendance is already recorded for this day") from exc
        except ConstraintViolation as exc:
            raise ValidationError("Unknown employee") from exc

        logger.info("Marked %s absent on %s", user_id, work_date)
        return record


def record_to_dict(r: AttendanceRecord) -> dict:
    return {
        "id": r.attendance_id,
        "user_id": r.user_id,
        "date": r.work_date.strftime("%Y-%m-%d"),
        "check_in_time": r.check_in_time.isoformat() if r.check_in_time else None,
        "check_out_time": r.check_out_time.isoformat() if r.check_out_time else None,
        "status": r.status.value,
        "total_hours": r.total_hours,
        "notes": r.notes,
    }
