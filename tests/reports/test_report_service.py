from __future__ import annotations

from datetime import date, datetime

import pytest

from src.employee_hq.employee_hq.core.enums import AttendanceStatus as S, Role
from src.employee_hq.employee_hq.core.exceptions import AuthorizationError, ValidationError
from src.employee_hq.employee_hq.profiles.model import Profile
from src.employee_hq.employee_hq.reports.service import ReportService

TODAY = date(2026, 2, 10)


@pytest.fixture
def org(profiles_repo, attendance_repo, record_factory):
    people = [
        ("u1", "E001", "Alice Nguyen", "Engineering"),
        ("u2", "E002", "Bob Tran", "Sales"),
        ("u3", "E003", "Carol Le", "Engineering"),
        ("u4", "E004", "Dan Pham", "Support"),
    ]
    for user_id, employee_id, name, dept in people:
        profiles_repo.profiles[user_id] = Profile(user_id=user_id, employee_id=employee_id, name=name, department=dept)
        profiles_repo.roles[user_id] = Role.EMPLOYEE

    rows = [
        ("u1", TODAY, S.PRESENT, datetime(2026, 2, 10, 8, 45)),
        ("u2", TODAY, S.LATE, datetime(2026, 2, 10, 10, 5)),
        ("u3", TODAY, S.HALF_DAY, datetime(2026, 2, 10, 8, 0)),
        ("u1", date(2026, 2, 9), S.LATE, datetime(2026, 2, 9, 11, 0)),
        ("u2", date(2026, 2, 9), S.ABSENT, None),
        ("u1", date(2026, 2, 3), S.PRESENT, datetime(2026, 2, 3, 9, 0)),
        ("u1", date(2026, 1, 30), S.PRESENT, datetime(2026, 1, 30, 9, 0)),
    ]
    for i, (user_id, day, status, check_in) in enumerate(rows, start=1):
        attendance_repo.add(
            record_factory(user_id, day, status, attendance_id=i, check_in_time=check_in, total_hours=8.0 if check_in else 0)
        )

    return ReportService(attendance_repo, profiles_repo)


def test_monthly_summary_uses_current_month_only(org):
    s = org.monthly_summary("u1", today=TODAY)

    assert (s.present, s.late, s.half_day, s.absent) == (2, 1, 0, 0)
    assert s.total_hours == 24.0


def test_manager_dashboard(org):
    d = org.manager_dashboard(current_role=Role.MANAGER, today=TODAY)

    assert d.summary.total_employees == 4
    assert d.summary.present_count == 2
    assert d.summary.absent_count == 2
    assert [p.user_id for p in d.summary.absent_employees] == ["u4"]
    assert [item.record.user_id for item in d.late_arrivals] == ["u2"]
    assert d.late_arrivals[0].profile.name == "Bob Tran"

    assert len(d.weekly_trend) == 7
    assert d.weekly_trend[0].date == date(2026, 2, 4)
    assert d.weekly_trend[-1].date == TODAY
    yesterday = d.weekly_trend[-2]
    assert (yesterday.present_count, yesterday.late_count, yesterday.absent_count) == (0, 1, 1)
    today = d.weekly_trend[-1]
    assert (today.present_count, today.late_count, today.absent_count) == (1, 1, 0)


def test_manager_views_reject_employees(org):
    with pytest.raises(AuthorizationError):
        org.manager_dashboard(current_role=Role.EMPLOYEE, today=TODAY)
    with pytest.raises(AuthorizationError):
        org.list_attendance(current_role=None)
    with pytest.raises(AuthorizationError):
        org.export_attendance(current_role=Role.EMPLOYEE)


def test_list_attendance_search_and_status(org):
    all_rows = org.list_attendance(current_role=Role.MANAGER)
    assert len(all_rows) == 7
    assert all_rows[0].record.work_date == TODAY

    eng = org.list_attendance(current_role=Role.MANAGER, search="ENGINEERING")
    assert {r.record.user_id for r in eng} == {"u1", "u3"}

    by_id = org.list_attendance(current_role=Role.MANAGER, search="e002")
    assert {r.record.user_id for r in by_id} == {"u2"}

    late = org.list_attendance(current_role=Role.MANAGER, status="late")
    assert {(r.record.user_id, r.record.work_date) for r in late} == {("u2", TODAY), ("u1", date(2026, 2, 9))}

    alice_late = org.list_attendance(current_role=Role.MANAGER, search="alice", status="late")
    assert len(alice_late) == 1


def test_list_attendance_rejects_unknown_status(org):
    with pytest.raises(ValidationError):
        org.list_attendance(current_role=Role.MANAGER, status="vacation")


def test_list_attendance_respects_limit(org):
    rows = org.list_attendance(current_role=Role.MANAGER, limit=3)

    assert len(rows) == 3


def test_export_returns_everything_newest_first(org):
    rows = org.export_attendance(current_role=Role.MANAGER)

    assert len(rows) == 7
    assert rows[-1].record.work_date == date(2026, 1, 30)
