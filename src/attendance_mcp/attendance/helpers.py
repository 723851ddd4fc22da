"""Shared lookups used by several attendance tools."""

from __future__ import annotations

from datetime import date, datetime
from typing import Any

from ..db import Session
from ..errors import InvalidArgumentError, InvalidLeaveTypeCodeError
from . import statements


def resolve_leave_type_id(session: Session, code: str) -> int:
    """Map the caller-facing leave type code to its internal id."""
    rows = session.execute(statements.LEAVE_TYPE_ID_BY_CODE, (code,)).rows
    if not rows:
        raise InvalidLeaveTypeCodeError(code)
    return rows[0]["leave_type_id"]


def year_of(value: Any) -> int:
    """Calendar year of a stored DATE value (driver date or ISO text)."""
    if isinstance(value, (date, datetime)):
        return value.year
    if isinstance(value, str):
        return date.fromisoformat(value[:10]).year
    raise InvalidArgumentError(f"cannot derive a year from {value!r}")
