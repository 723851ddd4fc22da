"""Syntactic read/write classification for caller-supplied SQL.

This is not a SQL parser and not an injection defense; it only decides whether a
free-form statement needs the caller's explicit ``confirm_write`` flag.
"""

from __future__ import annotations

import re
from enum import Enum

from ..errors import WriteNotConfirmedError

WRITE_KEYWORDS = ("insert", "update", "delete")
READ_KEYWORDS = ("select", "show", "describe", "desc", "explain")
READ_ONLY_KEYWORDS = ("select",)

_LEADING_WORD = re.compile(r"[A-Za-z]+")


class StatementKind(str, Enum):
    READ = "read"
    WRITE = "write"


def leading_keyword(sql: str) -> str:
    """First keyword of the trimmed statement, lower-cased ('' when there is none)."""
    match = _LEADING_WORD.match(sql.strip())
    return match.group(0).lower() if match else ""


def classify(sql: str) -> StatementKind:
    if leading_keyword(sql) in WRITE_KEYWORDS:
        return StatementKind.WRITE
    return StatementKind.READ


def is_known_read(sql: str) -> bool:
    return leading_keyword(sql) in READ_KEYWORDS


def requires_confirmation(sql: str) -> bool:
    return classify(sql) is StatementKind.WRITE or not is_known_read(sql)


def check_statement(sql: str, confirm_write: bool = False, read_only: bool = False) -> None:
    """Reject the statement unless it is a known read or the write has been confirmed.

    A read-only gateway accepts SELECT statements and nothing else.
    """
    keyword = leading_keyword(sql)
    if read_only:
        if keyword not in READ_ONLY_KEYWORDS:
            raise WriteNotConfirmedError(
                f"read-only gateway: only SELECT statements are allowed, got {keyword.upper() or 'statement'}"
            )
        return
    if requires_confirmation(sql) and not confirm_write:
        raise WriteNotConfirmedError(
            f"confirmation required: {keyword.upper() or 'statement'} modifies data, set confirm_write to true"
        )
