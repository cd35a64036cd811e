from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List, Optional

from ..attendance.model import AttendanceWithProfile
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import month_bounds, trailing_days
from ..core.constants import DEFAULT_ALL_ATTENDANCE_LIMIT, DEFAULT_TREND_DAYS
from ..core.enums import AttendanceStatus, Role
from ..core.exceptions import AuthorizationError, ValidationError
from ..profiles.repository import ProfileRepository
from .aggregations import summarize_month, summarize_org_day, weekly_trend
from .model import ManagerDashboard, MonthlySummary


def require_manager(role: Optional[Role]) -> None:
    if role != Role.MANAGER:
        raise AuthorizationError("Manager access required")


@dataclass(frozen=True)
class AttendanceFilter:
    search: str = ""
    status: str = "all"

    def matches(self, item: AttendanceWithProfile) -> bool:
        if self.status != "all" and item.record.status.value != self.status:
            return False

        term = self.search.strip().lower()
        if not term:
            return True

        p = item.profile
        haystack = (p.name, p.employee_id, p.department) if p else ()
        return any(term in (value or "").lower() for value in haystack)


class ReportService:
    """Read-side use cases: monthly summary, manager dashboard, listings."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        profiles: ProfileRepository,
        *,
        trend_days: int = DEFAULT_TREND_DAYS,
    ):
        self._attendance = attendance
        self._profiles = profiles
        self._trend_days = int(trend_days)

    def monthly_summary(self, user_id: str, *, today: date) -> MonthlySummary:
        start, end = month_bounds(today)
        records = self._attendance.get_for_user_in_range(user_id, start, end)
        return summarize_month(records, start, end)

    def manager_dashboard(self, *, current_role: Optional[Role], today: date) -> ManagerDashboard:
        require_manager(current_role)

        today_rows = list(self._attendance.get_for_date_with_profiles(today))
        today_records = [item.record for item in today_rows]
        profiles = list(self._profiles.list_all())

        records_by_date = {today: today_records}
        days = trailing_days(today, self._trend_days)
        for day in days:
            if day not in records_by_date:
                records_by_date[day] = list(self._attendance.get_for_date(day))

        return ManagerDashboard(
            today=today,
            summary=summarize_org_day(today_records, profiles),
            late_arrivals=[item for item in today_rows if item.record.status == AttendanceStatus.LATE],
            weekly_trend=weekly_trend(days, records_by_date),
        )

    def list_attendance(
        self,
        *,
        current_role: Optional[Role],
        search: str = "",
        status: str = "all",
        limit: int = DEFAULT_ALL_ATTENDANCE_LIMIT,
    ) -> List[AttendanceWithProfile]:
        require_manager(current_role)

        if status != "all" and status not in {s.value for s in AttendanceStatus}:
            raise ValidationError(f"Unknown status filter: {status}")

        rows = self._attendance.list_with_profiles(limit=limit)
        flt = AttendanceFilter(search=search or "", status=status)
        return [item for item in rows if flt.matches(item)]

    def export_attendance(self, *, current_role: Optional[Role]) -> List[AttendanceWithProfile]:
        require_manager(current_role)
        return list(self._attendance.list_with_profiles())
