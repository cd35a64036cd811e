from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import List

from ..attendance.model import AttendanceWithProfile
from ..profiles.model import Profile


@dataclass(frozen=True)
class MonthlySummary:
    present: int = 0
    absent: int = 0
    late: int = 0
    half_day: int = 0
    total_hours: float = 0.0


@dataclass(frozen=True)
class OrgDaySummary:
    """One org day.

    Note: `absent_count` and `absent_employees` use different rules on purpose:
    the count is "profiles minus present/late records", the list is "profiles
    with no record at all".
    """

    total_employees: int
    present_count: int
    absent_count: int
    absent_employees: List[Profile] = field(default_factory=list)


@dataclass(frozen=True)
class TrendPoint:
    date: date
    present_count: int
    late_count: int
    absent_count: int


@dataclass(frozen=True)
class ManagerDashboard:
    today: date
    summary: OrgDaySummary
    late_arrivals: List[AttendanceWithProfile]
    weekly_trend: List[TrendPoint]
