from __future__ import annotations

import json
from datetime import date, datetime
from typing import Optional, Sequence

from ..core.enums import AttendanceStatus
from ..core.exceptions import NotFound
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, unwrap_one
from ..profiles.model import Profile
from .model import AttendanceRecord, AttendanceWithProfile
from .repository import AttendanceRepository

_COLUMNS = "a.attendance_id, a.user_id, a.work_date, a.check_in_time, a.check_out_time, a.status, a.total_hours, a.notes"

_PROFILE_JSON = """
    CASE WHEN p.id IS NULL THEN NULL
         ELSE JSON_OBJECT('id', p.id, 'employee_id', p.employee_id, 'name', p.name, 'department', p.department)
    END AS profiles
"""


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        user_id=str(r["user_id"]),
        work_date=r["work_date"],
        check_in_time=r.get("check_in_time"),
        check_out_time=r.get("check_out_time"),
        status=AttendanceStatus(r["status"]),
        total_hours=float(r.get("total_hours") or 0),
        notes=r.get("notes"),
    )


def _to_profile(value) -> Optional[Profile]:
    if isinstance(value, (bytes, bytearray)):
        value = value.decode("utf-8")
    if isinstance(value, str):
        value = json.loads(value)

    related = unwrap_one(value)
    if not related:
        return None
    return Profile(
        user_id=str(related["id"]),
        employee_id=related["employee_id"],
        name=related["name"],
        department=related.get("department") or "",
    )


def _to_with_profile(r: dict) -> AttendanceWithProfile:
    return AttendanceWithProfile(record=_to_record(r), profile=_to_profile(r.get("profiles")))


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_for_user_and_date(self, user_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.user_id=%s AND a.work_date=%s",
                (user_id, work_date),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def get_recent_for_user(self, user_id: str, limit: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s
                ORDER BY a.work_date DESC
                LIMIT %s
                """,
                (user_id, int(limit)),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_history_for_user(self, user_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM attendance a WHERE a.user_id=%s ORDER BY a.work_date DESC",
                (user_id,),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_user_in_range(self, user_id: str, start_date: date, end_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM attendance a
                WHERE a.user_id=%s AND a.work_date >= %s AND a.work_date < %s
                ORDER BY a.work_date ASC
                """,
                (user_id, start_date, end_date),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_date(self, work_date: date) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE a.work_date=%s", (work_date,))
            return [_to_record(r) for r in fetchall(cur)]

    def get_for_date_with_profiles(self, work_date: date) -> Sequence[AttendanceWithProfile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}, {_PROFILE_JSON}
                FROM attendance a
                LEFT JOIN profiles p ON p.id = a.user_id
                WHERE a.work_date=%s
                ORDER BY a.check_in_time ASC
                """,
                (work_date,),
            )
            return [_to_with_profile(r) for r in fetchall(cur)]

    def list_with_profiles(self, *, limit: Optional[int] = None) -> Sequence[AttendanceWithProfile]:
        sql = f"""
            SELECT {_COLUMNS}, {_PROFILE_JSON}
            FROM attendance a
            LEFT JOIN profiles p ON p.id = a.user_id
            ORDER BY a.work_date DESC, a.attendance_id DESC
        """
        params: tuple = ()
        if limit is not None:
            sql += " LIMIT %s"
            params = (int(limit),)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_to_with_profile(r) for r in fetchall(cur)]

    def create_checkin(
        self,
        *,
        user_id: str,
        work_date: date,
        check_in_time: datetime,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # UNIQUE(user_id, work_date) makes the losing concurrent insert fail.
            cur.execute(
                """
                INSERT INTO attendance(user_id, work_date, check_in_time, status, total_hours)
                VALUES(%s,%s,%s,%s,0)
                """,
                (user_id, work_date, check_in_time, status.value),
            )
            attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=check_in_time,
            check_out_time=None,
            status=status,
            total_hours=0.0,
        )

    def update_checkout(
        self,
        *,
        attendance_id: int,
        check_out_time: datetime,
        total_hours: float,
        status: AttendanceStatus,
    ) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            # Conditional on the row still being open so two racing checkouts cannot both win.
            cur.execute(
                """
                UPDATE attendance
                SET check_out_time=%s, total_hours=%s, status=%s
                WHERE attendance_id=%s AND check_in_time IS NOT NULL AND check_out_time IS NULL
                """,
                (check_out_time, float(total_hours), status.value, int(attendance_id)),
            )
            if cur.rowcount == 0:
                raise NotFound(f"No open attendance row {attendance_id}")

            cur.execute(f"SELECT {_COLUMNS} FROM attendance a WHERE a.attendance_id=%s", (int(attendance_id),))
            return _to_record(fetchone(cur))

    def create_absence(self, *, user_id: str, work_date: date, notes: Optional[str] = None) -> AttendanceRecord:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO attendance(user_id, work_date, status, total_hours, notes)
                VALUES(%s,%s,%s,0,%s)
                """,
                (user_id, work_date, AttendanceStatus.ABSENT.value, notes),
            )
            attendance_id = int(cur.lastrowid)

        return AttendanceRecord(
            attendance_id=attendance_id,
            user_id=user_id,
            work_date=work_date,
            check_in_time=None,
            check_out_time=None,
            status=AttendanceStatus.ABSENT,
            total_hours=0.0,
            notes=notes,
        )
