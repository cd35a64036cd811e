from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from .attendance.factory import AttendanceStrategyFactory
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .auth.mysql_credential_repository import MySQLCredentialRepository
from .common.datetime_utils import load_timezone
from .core.constants import DEFAULT_HALF_DAY_HOURS, DEFAULT_LATE_CUTOFF_HOUR
from .database.connection import DBConfig, DatabaseConnection
from .profiles.mysql_profile_repository import MySQLProfileRepository
from .profiles.service import ProfileService
from .reports.service import ReportService


@dataclass(frozen=True)
class Container:
    conn: Optional[DatabaseConnection]

    profiles_repo: MySQLProfileRepository
    attendance_repo: MySQLAttendanceRepository
    credentials_repo: MySQLCredentialRepository

    attendance_service: AttendanceService
    report_service: ReportService
    profile_service: ProfileService


@dataclass(frozen=True)
class BusinessRules:
    late_cutoff_hour: int = DEFAULT_LATE_CUTOFF_HOUR
    half_day_hours: float = DEFAULT_HALF_DAY_HOURS
    timezone: Optional[str] = None


def build_services(
    *,
    conn: Optional[DatabaseConnection],
    profiles_repo,
    attendance_repo,
    credentials_repo,
    rules: BusinessRules = BusinessRules(),
) -> Container:
    """Wire services on top of any set of repositories (MySQL or in-memory)."""

    attendance_service = AttendanceService(
        attendance_repo,
        profiles_repo,
        strategy_factory=AttendanceStrategyFactory(
            late_cutoff_hour=int(rules.late_cutoff_hour),
            half_day_hours=float(rules.half_day_hours),
        ),
        tz=load_timezone(rules.timezone),
    )
    report_service = ReportService(attendance_repo, profiles_repo)
    profile_service = ProfileService(profiles_repo)

    return Container(
        conn=conn,
        profiles_repo=profiles_repo,
        attendance_repo=attendance_repo,
        credentials_repo=credentials_repo,
        attendance_service=attendance_service,
        report_service=report_service,
        profile_service=profile_service,
    )


def build_container(*, db_config: dict, rules: BusinessRules = BusinessRules()) -> Container:
    conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config))

    return build_services(
        conn=conn,
        profiles_repo=MySQLProfileRepository(conn),
        attendance_repo=MySQLAttendanceRepository(conn),
        credentials_repo=MySQLCredentialRepository(conn),
        rules=rules,
    )
