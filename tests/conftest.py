"""Shared fixtures: an in-memory SQLite store shaped like the attendance schema."""

from __future__ import annotations

import sqlite3
from contextlib import contextmanager
from decimal import Decimal
from typing import Any, Dict, Iterator, List, Optional, Tuple

import pytest

from attendance_mcp.attendance.catalog import build_catalog
from attendance_mcp.attendance.dispatcher import ToolDispatcher
from attendance_mcp.db import Database, Session, StatementResult
from attendance_mcp.errors import StoreError

sqlite3.register_adapter(Decimal, str)

DATABASE_NAME = "attendance_system"
TABLES = ("employees", "leave_types", "leave_requests", "employee_leave_balances")

SCHEMA = """
CREATE TABLE employees (
    employee_id TEXT PRIMARY KEY,
    employee_name TEXT NOT NULL,
    department TEXT,
    position TEXT,
    hire_date TEXT,
    email TEXT,
    phone TEXT,
    status TEXT NOT NULL DEFAULT 'active'
);
CREATE TABLE leave_types (
    leave_type_id INTEGER PRIMARY KEY AUTOINCREMENT,
    leave_type_code TEXT NOT NULL UNIQUE,
    leave_type_name TEXT NOT NULL
);
CREATE TABLE leave_requests (
    request_id INTEGER PRIMARY KEY AUTOINCREMENT,
    employee_id TEXT NOT NULL,
    leave_type_id INTEGER NOT NULL,
    start_date TEXT NOT NULL,
    end_date TEXT NOT NULL,
    days_requested NUMERIC NOT NULL,
    reason TEXT,
    status TEXT NOT NULL DEFAULT 'pending',
    approved_by TEXT,
    approved_at TEXT,
    created_at TEXT NOT NULL DEFAULT CURRENT_TIMESTAMP
);
CREATE TABLE employee_leave_balances (
    balance_id INTEGER PRIMARY KEY AUTOINCREMENT,
    employee_id TEXT NOT NULL,
    leave_type_id INTEGER NOT NULL,
    year INTEGER NOT NULL,
    total_days NUMERIC NOT NULL DEFAULT 0,
    used_days NUMERIC NOT NULL DEFAULT 0,
    remaining_days NUMERIC GENERATED ALWAYS AS (total_days - used_days) VIRTUAL,
    UNIQUE (employee_id, leave_type_id, year)
);
"""

SEED = """
INSERT INTO leave_types (leave_type_id, leave_type_code, leave_type_name) VALUES
    (1, 'ANNUAL', 'Annual leave'),
    (2, 'SICK', 'Sick leave');

INSERT INTO employees VALUES
    ('E001', 'Alice Chen', 'Engineering', 'Engineer', '2020-01-15', 'alice@example.com', '0912-000-001', 'active'),
    ('E002', 'Bob Lin', 'HR', 'Manager', '2018-06-01', 'bob@example.com', NULL, 'active'),
    ('E003', 'Carol Wu', 'Finance', 'Analyst', '2019-03-01', NULL, NULL, 'inactive');

INSERT INTO employee_leave_balances (employee_id, leave_type_id, year, total_days, used_days) VALUES
    ('E001', 1, 2025, 14, 2),
    ('E001', 2, 2025, 30, 0),
    ('E001', 1, 2024, 10, 10);

INSERT INTO leave_requests
    (request_id, employee_id, leave_type_id, start_date, end_date, days_requested, reason, status, approved_by, created_at)
VALUES
    (1, 'E001', 1, '2025-03-10', '2025-03-11', 2, 'Family trip', 'pending', NULL, '2025-03-01 09:00:00'),
    (2, 'E001', 2, '2025-02-03', '2025-02-03', 1, 'Flu', 'approved', 'E002', '2025-02-03 08:00:00'),
    (3, 'E002', 1, '2026-01-05', '2026-01-06', 1.5, 'Half day', 'pending', NULL, '2025-03-05 10:00:00'),
    (4, 'E001', 1, '2025-01-20', '2025-01-20', 1, 'Errand', 'cancelled', NULL, '2025-01-10 12:00:00'),
    (5, 'E001', 1, '2024-12-30', '2025-01-02', 3, 'Year end', 'pending', NULL, '2024-12-01 09:00:00');
"""

INFORMATION_SCHEMA = """
ATTACH DATABASE ':memory:' AS information_schema;
CREATE TABLE information_schema.TABLES (
    TABLE_SCHEMA TEXT, TABLE_NAME TEXT, TABLE_TYPE TEXT, TABLE_COMMENT TEXT, TABLE_ROWS INTEGER
);
CREATE TABLE information_schema.COLUMNS (
    TABLE_SCHEMA TEXT, TABLE_NAME TEXT, COLUMN_NAME TEXT, ORDINAL_POSITION INTEGER,
    DATA_TYPE TEXT, IS_NULLABLE TEXT, COLUMN_DEFAULT TEXT, COLUMN_COMMENT TEXT, COLUMN_KEY TEXT
);
"""


def _normalize(sql: str) -> str:
    return " ".join(sql.split())


class SqliteSession(Session):
    def __init__(self, database: "SqliteDatabase") -> None:
        self._database = database
        self._connection = database.connection

    def _execute(self, sql: str, params: tuple) -> StatementResult:
        statement = _normalize(sql)
        self._database.statements.append((statement, params))
        if self._database.fail_on and self._database.fail_on in statement:
            raise StoreError(f"simulated failure on: {self._database.fail_on}")
        try:
            if params:
                cursor = self._connection.execute(sql.replace("%s", "?"), params)
            else:
                cursor = self._connection.execute(sql)
        except sqlite3.Error as exc:
            raise StoreError(str(exc)) from exc
        if cursor.description is not None:
            return StatementResult(rows=[dict(row) for row in cursor.fetchall()], has_rows=True)
        inserted_id = cursor.lastrowid if statement.lower().startswith("insert") else None
        return StatementResult(affected_rows=max(cursor.rowcount, 0), inserted_id=inserted_id)

    def _begin(self) -> None:
        self._connection.execute("BEGIN")

    def _commit(self) -> None:
        self._connection.execute("COMMIT")

    def _rollback(self) -> None:
        self._connection.execute("ROLLBACK")


class SqliteDatabase(Database):
    """Records every statement and session so tests can assert what reached the store."""

    def __init__(self) -> None:
        self.connection = sqlite3.connect(":memory:", isolation_level=None, check_same_thread=False)
        self.connection.row_factory = sqlite3.Row
        self.connection.create_function("DATABASE", 0, lambda: DATABASE_NAME)
        self.connection.executescript(SCHEMA)
        self.connection.executescript(SEED)
        self.connection.executescript(INFORMATION_SCHEMA)
        self._describe_tables()
        self.statements: List[Tuple[str, tuple]] = []
        self.sessions_opened = 0
        self.sessions_closed = 0
        self.fail_on: Optional[str] = None

    def _describe_tables(self) -> None:
        for table in TABLES:
            count = self.connection.execute(f"SELECT COUNT(*) FROM {table}").fetchone()[0]
            self.connection.execute(
                "INSERT INTO information_schema.TABLES VALUES (?, ?, 'BASE TABLE', ?, ?)",
                (DATABASE_NAME, table, f"{table} table", count),
            )
            for column in self.connection.execute(f"PRAGMA table_info({table})").fetchall():
                self.connection.execute(
                    "INSERT INTO information_schema.COLUMNS VALUES (?, ?, ?, ?, ?, ?, ?, '', ?)",
                    (
                        DATABASE_NAME,
                        table,
                        column["name"],
                        column["cid"] + 1,
                        column["type"].lower(),
                        "NO" if column["notnull"] or column["pk"] else "YES",
                        column["dflt_value"],
                        "PRI" if column["pk"] else "",
                    ),
                )

    @contextmanager
    def session(self) -> Iterator[SqliteSession]:
        self.sessions_opened += 1
        try:
            yield SqliteSession(self)
        finally:
            self.sessions_closed += 1

    def query(self, sql: str, params: tuple = ()) -> List[Dict[str, Any]]:
        """Read the store directly, bypassing the statement log."""
        return [dict(row) for row in self.connection.execute(sql, params).fetchall()]

    def close(self) -> None:
        self.connection.close()


@pytest.fixture
def database() -> Iterator[SqliteDatabase]:
    db = SqliteDatabase()
    yield db
    db.close()


@pytest.fixture
def dispatcher(database: SqliteDatabase) -> ToolDispatcher:
    return ToolDispatcher(build_catalog(2025), database)


@pytest.fixture
def read_only_dispatcher(database: SqliteDatabase) -> ToolDispatcher:
    return ToolDispatcher(build_catalog(2025, read_only=True), database)
