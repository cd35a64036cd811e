from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import Any, Dict, List, Optional

import mysql.connector
from mysql.connector import errorcode

from ..core.exceptions import ConstraintViolation, StoreError, StoreUnavailable, UniqueConstraintViolation

logger = logging.getLogger(__name__)


@contextmanager
def db_cursor(conn_factory, *, dictionary: bool = True):
    """Yield (conn, cursor) for one unit of work.

    Commits on success, rolls back on any failure. Duplicate keys become
    UniqueConstraintViolation, other integrity errors (foreign key, check)
    ConstraintViolation, anything else from the driver StoreUnavailable.
    """

    try:
        conn = conn_factory.connect()
    except mysql.connector.Error as exc:
        logger.exception("Could not connect to the record store")
        raise StoreUnavailable(str(exc)) from exc

    try:
        cur = conn.cursor(dictionary=dictionary)
        try:
            yield conn, cur
            conn.commit()
        finally:
            cur.close()
    except mysql.connector.IntegrityError as exc:
        conn.rollback()
        if exc.errno == errorcode.ER_DUP_ENTRY:
            raise UniqueConstraintViolation(str(exc)) from exc
        logger.warning("Constraint rejected write: %s", exc)
        raise ConstraintViolation(str(exc)) from exc
    except mysql.connector.Error as exc:
        conn.rollback()
        logger.exception("Record store request failed")
        raise StoreUnavailable(str(exc)) from exc
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def fetchone(cur) -> Optional[Dict[str, Any]]:
    row = cur.fetchone()
    return row if row else None


def fetchall(cur) -> List[Dict[str, Any]]:
    rows = cur.fetchall()
    return list(rows or [])


def unwrap_one(value: Any) -> Optional[Dict[str, Any]]:
    """Normalize a related row to a single optional value.

    A joined relation can come back as a dict, a one-element list, an empty
    list or None depending on how it was selected.
    """

    if value is None:
        return None
    if isinstance(value, (list, tuple)):
        if not value:
            return None
        if len(value) > 1:
            raise StoreError(f"Expected at most one related row, got {len(value)}")
        return value[0]
    return value
