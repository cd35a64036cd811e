from __future__ import annotations

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.employee_hq.employee_hq.core.exceptions import (
    ConstraintViolation,
    StoreError,
    StoreUnavailable,
    UniqueConstraintViolation,
)
from src.employee_hq.employee_hq.database.bootstrap import _strip_create_db_and_use, iter_sql_statements
from src.employee_hq.employee_hq.database.mysql_base import db_cursor, unwrap_one


class FakeCursor:
    def __init__(self):
        self.closed = False

    def close(self):
        self.closed = True


class FakeConn:
    def __init__(self):
        self.cursor_obj = FakeCursor()
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return self.cursor_obj

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, error=None):
        self.conn = conn
        self.error = error

    def connect(self):
        if self.error:
            raise self.error
        return self.conn


def test_commits_and_closes_on_success():
    conn = FakeConn()
    with db_cursor(FakeFactory(conn)) as (c, cur):
        assert c is conn
        assert cur is conn.cursor_obj

    assert conn.committed
    assert not conn.rolled_back
    assert conn.closed
    assert conn.cursor_obj.closed


def test_duplicate_entry_maps_to_unique_violation():
    conn = FakeConn()
    with pytest.raises(UniqueConstraintViolation):
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)

    assert conn.rolled_back
    assert not conn.committed
    assert conn.closed


def test_foreign_key_error_maps_to_constraint_violation():
    conn = FakeConn()
    with pytest.raises(ConstraintViolation) as info:
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.IntegrityError(msg="FK failed", errno=errorcode.ER_NO_REFERENCED_ROW_2)

    assert conn.rolled_back
    assert not isinstance(info.value, (StoreUnavailable, UniqueConstraintViolation))


def test_connector_error_maps_to_unavailable():
    conn = FakeConn()
    with pytest.raises(StoreUnavailable):
        with db_cursor(FakeFactory(conn)):
            raise mysql.connector.Error(msg="Lost connection")

    assert conn.rolled_back
    assert conn.closed


def test_connect_failure_maps_to_unavailable():
    with pytest.raises(StoreUnavailable):
        with db_cursor(FakeFactory(error=mysql.connector.Error(msg="Can't connect"))):
            pass


def test_non_store_errors_propagate_after_rollback():
    conn = FakeConn()
    with pytest.raises(KeyError):
        with db_cursor(FakeFactory(conn)):
            raise KeyError("missing")

    assert conn.rolled_back
    assert conn.closed


@pytest.mark.parametrize(
    "value,expected",
    [
        (None, None),
        ([], None),
        ([{"id": 1}], {"id": 1}),
        (({"id": 2},), {"id": 2}),
        ({"id": 3}, {"id": 3}),
    ],
)
def test_unwrap_one(value, expected):
    assert unwrap_one(value) == expected


def test_unwrap_one_rejects_many():
    with pytest.raises(StoreError):
        unwrap_one([{"id": 1}, {"id": 2}])


def test_iter_sql_statements_respects_quotes():
    sql = "CREATE TABLE a (x INT);\nINSERT INTO a VALUES ('x;y');\n\nSELECT \"q;\" ;"

    assert list(iter_sql_statements(sql)) == [
        "CREATE TABLE a (x INT)",
        "INSERT INTO a VALUES ('x;y')",
        'SELECT "q;"',
    ]


def test_strip_create_db_and_use():
    sql = "CREATE DATABASE IF NOT EXISTS foo;\nUSE foo;\nCREATE TABLE t (id INT);\n"

    assert list(iter_sql_statements(_strip_create_db_and_use(sql))) == ["CREATE TABLE t (id INT)"]
