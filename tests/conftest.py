from __future__ import annotations

from dataclasses import replace
from datetime import date, datetime
from typing import Dict, List, Optional, Tuple

import pytest

from src.employee_hq.employee_hq.attendance.model import AttendanceRecord, AttendanceWithProfile
from src.employee_hq.employee_hq.auth.model import Credential
from src.employee_hq.employee_hq.core.enums import AttendanceStatus, Role
from src.employee_hq.employee_hq.core.exceptions import ConstraintViolation, NotFound, UniqueConstraintViolation
from src.employee_hq.employee_hq.profiles.model import Profile


class InMemoryAttendance:
    def __init__(self, profiles: "InMemoryProfiles | None" = None):
        self._by_user_date: Dict[Tuple[str, date], AttendanceRecord] = {}
        self._profiles = profiles
        self._id = 0

    def add(self, record: AttendanceRecord) -> AttendanceRecord:
        self._by_user_date[(record.user_id, record.work_date)] = record
        self._id = max(self._id, record.attendance_id)
        return record

    def all(self) -> List[AttendanceRecord]:
        return list(self._by_user_date.values())

    def _require_profile(self, user_id: str) -> None:
        # Mirrors the attendance -> profiles foreign key.
        if self._profiles is not None and self._profiles.get_by_id(user_id) is None:
            raise ConstraintViolation(f"Cannot add attendance for unknown user {user_id}")

    def _with_profile(self, r: AttendanceRecord) -> AttendanceWithProfile:
        profile = self._profiles.get_by_id(r.user_id) if self._profiles else None
        return AttendanceWithProfile(record=r, profile=profile)

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        return self._by_user_date.get((user_id, work_date))

    def get_recent_for_user(self, user_id: str, limit: int):
        return self.get_history_for_user(user_id)[:limit]

    def get_history_for_user(self, user_id: str):
        items = [r for r in self._by_user_date.values() if r.user_id == user_id]
        items.sort(key=lambda r: r.work_date, reverse=True)
        return items

    def get_for_user_in_range(self, user_id: str, start_date: date, end_date: date):
        return [
            r
            for r in self._by_user_date.values()
            if r.user_id == user_id and start_date <= r.work_date < end_date
        ]

    def get_for_date(self, work_date: date):
        return [r for r in self._by_user_date.values() if r.work_date == work_date]

    def get_for_date_with_profiles(self, work_date: date):
        return [self._with_profile(r) for r in self.get_for_date(work_date)]

    def list_with_profiles(self, *, limit=None):
        items = sorted(self._by_user_date.values(), key=lambda r: (r.work_date, r.attendance_id), reverse=True)
        if limit is not None:
            items = items[:limit]
        return [self._with_profile(r) for r in items]

    def create_checkin(self, *, user_id, work_date, check_in_time, status) -> AttendanceRecord:
        if (user_id, work_date) in self._by_user_date:
            raise UniqueConstraintViolation("Duplicate entry for user/date")
        self._require_profile(user_id)
        self._id += 1
        return self.add(
            AttendanceRecord(
                attendance_id=self._id,
                user_id=user_id,
                work_date=work_date,
                check_in_time=check_in_time,
                check_out_time=None,
                status=status,
                total_hours=0.0,
            )
        )

    def update_checkout(self, *, attendance_id, check_out_time, total_hours, status) -> AttendanceRecord:
        for key, r in self._by_user_date.items():
            if r.attendance_id == attendance_id and r.is_open:
                updated = replace(r, check_out_time=check_out_time, total_hours=total_hours, status=status)
                self._by_user_date[key] = updated
                return updated
        raise NotFound(f"No open attendance row {attendance_id}")

    def create_absence(self, *, user_id, work_date, notes=None) -> AttendanceRecord:
        if (user_id, work_date) in self._by_user_date:
            raise UniqueConstraintViolation("Duplicate entry for user/date")
        self._require_profile(user_id)
        self._id += 1
        return self.add(
            AttendanceRecord(
                attendance_id=self._id,
                user_id=user_id,
                work_date=work_date,
                check_in_time=None,
                check_out_time=None,
                status=AttendanceStatus.ABSENT,
                notes=notes,
            )
        )


class InMemoryProfiles:
    def __init__(self):
        self.profiles: Dict[str, Profile] = {}
        self.roles: Dict[str, Role] = {}

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        return self.profiles.get(user_id)

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        return next((p for p in self.profiles.values() if p.employee_id == employee_id), None)

    def get_role(self, user_id: str) -> Optional[Role]:
        return self.roles.get(user_id)

    def list_all(self):
        return sorted(self.profiles.values(), key=lambda p: p.employee_id)

    def create_profile(self, *, user_id, employee_id, name, department, role) -> Profile:
        if self.get_by_employee_id(employee_id):
            raise UniqueConstraintViolation("Duplicate employee_id")
        profile = Profile(user_id=user_id, employee_id=employee_id, name=name, department=department)
        self.profiles[user_id] = profile
        self.roles[user_id] = role
        return profile


class InMemoryCredentials:
    def __init__(self):
        self.by_email: Dict[str, Credential] = {}

    def get_by_email(self, email: str) -> Optional[Credential]:
        return self.by_email.get(email)

    def create(self, *, user_id, email, password_hash) -> None:
        if email in self.by_email:
            raise UniqueConstraintViolation("Duplicate email")
        self.by_email[email] = Credential(user_id=user_id, email=email, password_hash=password_hash)

    def delete(self, user_id: str) -> None:
        self.by_email = {e: c for e, c in self.by_email.items() if c.user_id != user_id}


def make_record(
    user_id: str,
    work_date: date,
    status: AttendanceStatus,
    *,
    attendance_id: int = 0,
    total_hours: float = 0.0,
    check_in_time: Optional[datetime] = None,
    check_out_time: Optional[datetime] = None,
) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=attendance_id,
        user_id=user_id,
        work_date=work_date,
        check_in_time=check_in_time,
        check_out_time=check_out_time,
        status=status,
        total_hours=total_hours,
    )


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 8, 30, 0)


@pytest.fixture
def profiles_repo() -> InMemoryProfiles:
    return InMemoryProfiles()


@pytest.fixture
def attendance_repo(profiles_repo) -> InMemoryAttendance:
    return InMemoryAttendance(profiles_repo)


@pytest.fixture
def credentials_repo() -> InMemoryCredentials:
    return InMemoryCredentials()


@pytest.fixture
def record_factory():
    return make_record
