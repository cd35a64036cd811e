"""Pure aggregation rules over attendance records.

Nothing here touches a repository: callers fetch rows and pass them in, so
every function is deterministic and independent of input order.
"""

from __future__ import annotations

from collections import Counter
from datetime import date
from math import fsum
from typing import Iterable, List, Mapping, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..profiles.model import Profile
from .model import MonthlySummary, OrgDaySummary, TrendPoint

_PRESENT_LIKE = frozenset({AttendanceStatus.PRESENT, AttendanceStatus.LATE})


def summarize_month(records: Iterable[AttendanceRecord], month_start: date, month_end: date) -> MonthlySummary:
    """Counts per status and summed hours for rows dated in [month_start, month_end)."""

    in_range = [r for r in records if month_start <= r.work_date < month_end]
    counts = Counter(r.status for r in in_range)
    return MonthlySummary(
        present=counts[AttendanceStatus.PRESENT],
        absent=counts[AttendanceStatus.ABSENT],
        late=counts[AttendanceStatus.LATE],
        half_day=counts[AttendanceStatus.HALF_DAY],
        total_hours=fsum(r.total_hours or 0.0 for r in in_range),
    )


def summarize_org_day(records: Sequence[AttendanceRecord], profiles: Sequence[Profile]) -> OrgDaySummary:
    present_count = sum(1 for r in records if r.status in _PRESENT_LIKE)
    owners = {r.user_id for r in records}

    return OrgDaySummary(
        total_employees=len(profiles),
        present_count=present_count,
        absent_count=len(profiles) - present_count,
        absent_employees=[p for p in profiles if p.user_id not in owners],
    )


def weekly_trend(days: Sequence[date], records_by_date: Mapping[date, Sequence[AttendanceRecord]]) -> List[TrendPoint]:
    """One point per day, oldest first; days are counted independently."""

    points = []
    for day in sorted(days):
        counts = Counter(r.status for r in records_by_date.get(day, ()))
        points.append(
            TrendPoint(
                date=day,
                present_count=counts[AttendanceStatus.PRESENT],
                late_count=counts[AttendanceStatus.LATE],
                absent_count=counts[AttendanceStatus.ABSENT],
            )
        )
    return points
