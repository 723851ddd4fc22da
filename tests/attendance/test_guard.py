"""Tests for the free-form SQL write guard."""

import pytest

from attendance_mcp.attendance.guard import (
    StatementKind,
    check_statement,
    classify,
    is_known_read,
    leading_keyword,
)
from attendance_mcp.errors import ErrorKind, WriteNotConfirmedError


@pytest.mark.parametrize(
    "sql, expected",
    [
        ("SELECT * FROM employees", StatementKind.READ),
        ("  select 1", StatementKind.READ),
        ("INSERT INTO employees VALUES (1)", StatementKind.WRITE),
        ("\n\tupdate employees set status='inactive'", StatementKind.WRITE),
        ("Delete FROM leave_requests", StatementKind.WRITE),
        ("drop table employees", StatementKind.READ),
        ("", StatementKind.READ),
    ],
)
def test_classify_uses_leading_keyword(sql, expected):
    assert classify(sql) is expected


def test_leading_keyword_is_lower_cased_and_trimmed():
    assert leading_keyword("   SHOW TABLES") == "show"
    assert leading_keyword("  ") == ""
    assert leading_keyword("(select 1)") == ""


@pytest.mark.parametrize("sql", ["select 1", "SHOW TABLES", "describe employees", "EXPLAIN select 1"])
def test_known_reads_pass_without_confirmation(sql):
    assert is_known_read(sql)
    check_statement(sql)


@pytest.mark.parametrize(
    "sql",
    [
        "update employees set status='inactive'",
        "insert into leave_types values (9, 'X', 'x')",
        "delete from employees",
        "drop table employees",
        "truncate employee_leave_balances",
        "with x as (select 1) delete from employees",
        "/* comment */ select 1",
    ],
)
def test_anything_but_a_known_read_needs_confirmation(sql):
    with pytest.raises(WriteNotConfirmedError) as excinfo:
        check_statement(sql, confirm_write=False)
    assert excinfo.value.kind is ErrorKind.WRITE_NOT_CONFIRMED
    assert "confirm_write" in str(excinfo.value)

    check_statement(sql, confirm_write=True)


def test_read_only_rejects_writes_even_when_confirmed():
    with pytest.raises(WriteNotConfirmedError, match="read-only gateway"):
        check_statement("update employees set status='inactive'", confirm_write=True, read_only=True)
    check_statement("select * from employees", read_only=True)


@pytest.mark.parametrize("sql", ["SHOW TABLES", "describe employees", "EXPLAIN select 1", "with x as (select 1) select * from x"])
def test_read_only_accepts_nothing_but_select(sql):
    with pytest.raises(WriteNotConfirmedError, match="only SELECT statements are allowed"):
        check_statement(sql, read_only=True)
