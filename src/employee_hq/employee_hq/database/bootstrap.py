from __future__ import annotations

import logging
import re
import uuid
from dataclasses import dataclass
from pathlib import Path
from typing import Iterator

import mysql.connector
from werkzeug.security import generate_password_hash

logger = logging.getLogger(__name__)

_QUOTES = ("'", '"', "`")


@dataclass(frozen=True)
class DBTarget:
    host: str
    port: int
    user: str
    password: str
    database: str


def _as_target(db_config: dict) -> DBTarget:
    return DBTarget(
        host=str(db_config.get("host", "localhost")),
        port=int(db_config.get("port", 3306)),
        user=str(db_config.get("user", "root")),
        password=str(db_config.get("password", "")),
        database=str(db_config.get("database", "employee_hq")),
    )


def _connect(target: DBTarget, *, with_database: bool = True):
    kwargs = dict(host=target.host, port=target.port, user=target.user, password=target.password, use_pure=True)
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # Keep schema.sql compatible regardless of DB name.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def iter_sql_statements(sql: str) -> Iterator[str]:
    """Split a schema script on top-level ';' (quoted semicolons stay put)."""
    start = 0
    quote = None
    i = 0
    while i < len(sql):
        ch = sql[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in _QUOTES:
            quote = ch
        elif ch == ";":
            stmt = sql[start:i].strip()
            if stmt:
                yield stmt
            start = i + 1
        i += 1

    tail = sql[start:].strip()
    if tail:
        yield tail


def ensure_database_exists(db_config: dict) -> None:
    target = _as_target(db_config)
    conn = _connect(target, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(
            f"CREATE DATABASE IF NOT EXISTS `{target.database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci;"
        )
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)

    sql = _strip_create_db_and_use(Path(schema_path).read_text(encoding="utf-8"))
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
        conn.commit()
    finally:
        conn.close()


DEMO_USERS = (
    # email, password, employee_id, name, department, role
    ("manager@example.com", "manager123", "MGR001", "Demo Manager", "Operations", "manager"),
    ("employee@example.com", "employee123", "EMP001", "Demo Employee", "Engineering", "employee"),
)


def ensure_demo_users(db_config: dict) -> None:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor(dictionary=True)

        for email, password, employee_id, name, department, role in DEMO_USERS:
            cur.execute("SELECT user_id FROM credentials WHERE email=%s", (email,))
            existing = cur.fetchone()
            if existing:
                user_id = existing["user_id"]
                cur.execute(
                    "UPDATE credentials SET password_hash=%s, is_active=1 WHERE user_id=%s",
                    (generate_password_hash(password), user_id),
                )
            else:
                user_id = str(uuid.uuid4())
                cur.execute(
                    "INSERT INTO credentials(user_id, email, password_hash) VALUES(%s,%s,%s)",
                    (user_id, email, generate_password_hash(password)),
                )

            cur.execute(
                """
                INSERT INTO profiles(id, employee_id, name, department)
                VALUES(%s,%s,%s,%s)
                ON DUPLICATE KEY UPDATE name=VALUES(name), department=VALUES(department)
                """,
                (user_id, employee_id, name, department),
            )
            cur.execute(
                "INSERT INTO user_roles(user_id, role) VALUES(%s,%s) ON DUPLICATE KEY UPDATE role=VALUES(role)",
                (user_id, role),
            )
            logger.info("Demo user ready: %s (%s)", email, role)

        conn.commit()
    finally:
        conn.close()


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(_as_target(db_config))
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
