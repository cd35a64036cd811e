from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Credential
from .repository import CredentialRepository


def _to_credential(row: dict) -> Credential:
    return Credential(
        user_id=str(row["user_id"]),
        email=row["email"],
        password_hash=row["password_hash"],
        is_active=bool(row.get("is_active", True)),
    )


class MySQLCredentialRepository(CredentialRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_email(self, email: str) -> Optional[Credential]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT user_id, email, password_hash, is_active FROM credentials WHERE email=%s",
                (email,),
            )
            row = fetchone(cur)
            return _to_credential(row) if row else None

    def create(self, *, user_id: str, email: str, password_hash: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO credentials(user_id, email, password_hash) VALUES(%s,%s,%s)",
                (user_id, email, password_hash),
            )

    def delete(self, user_id: str) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM credentials WHERE user_id=%s", (user_id,))
