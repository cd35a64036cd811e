from __future__ import annotations

from typing import Optional, Sequence

from ..core.enums import Role
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Profile
from .repository import ProfileRepository


def _to_profile(row: dict) -> Profile:
    return Profile(
        user_id=str(row["id"]),
        employee_id=row["employee_id"],
        name=row["name"],
        department=row.get("department") or "",
    )


class MySQLProfileRepository(ProfileRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, user_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, employee_id, name, department FROM profiles WHERE id=%s",
                (user_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_by_employee_id(self, employee_id: str) -> Optional[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT id, employee_id, name, department FROM profiles WHERE employee_id=%s",
                (employee_id,),
            )
            row = fetchone(cur)
            return _to_profile(row) if row else None

    def get_role(self, user_id: str) -> Optional[Role]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT role FROM user_roles WHERE user_id=%s", (user_id,))
            row = fetchone(cur)
            return Role(row["role"]) if row else None

    def list_all(self) -> Sequence[Profile]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT id, employee_id, name, department FROM profiles ORDER BY employee_id")
            return [_to_profile(r) for r in fetchall(cur)]

    def create_profile(self, *, user_id: str, employee_id: str, name: str, department: str, role: Role) -> Profile:
        # One transaction: a failed role insert rolls the profile back too.
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO profiles(id, employee_id, name, department)
                VALUES(%s,%s,%s,%s)
                """,
                (user_id, employee_id, name, department),
            )
            cur.execute(
                "INSERT INTO user_roles(user_id, role) VALUES(%s,%s)",
                (user_id, role.value),
            )
        return Profile(user_id=user_id, employee_id=employee_id, name=name, department=department)
