"""Assemble SET and WHERE fragments from sparse optional arguments.

Column names come only from the fixed per-tool enumerations below, checked in their
declared order, so caller keys never reach the statement text.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Sequence, Tuple

from ..errors import NothingToUpdateError
from .statements import PLACEHOLDER

# (argument name, column name)
FieldMap = Sequence[Tuple[str, str]]

EMPLOYEE_UPDATE_FIELDS: FieldMap = (
    ("employee_name", "employee_name"),
    ("department", "department"),
    ("position", "position"),
    ("email", "email"),
    ("phone", "phone"),
    ("status", "status"),
)

BALANCE_UPDATE_FIELDS: FieldMap = (
    ("total_days", "total_days"),
    ("used_days", "used_days"),
)

# (argument name, condition with one placeholder)
LEAVE_REQUEST_FILTERS: FieldMap = (
    ("employee_id", f"lr.employee_id = {PLACEHOLDER}"),
    ("status", f"lr.status = {PLACEHOLDER}"),
    ("start_date", f"lr.start_date >= {PLACEHOLDER}"),
    ("end_date", f"lr.end_date <= {PLACEHOLDER}"),
)


def is_present(value: Any) -> bool:
    """A value counts as supplied unless it is missing or an empty string."""
    if value is None:
        return False
    if isinstance(value, str) and not value.strip():
        return False
    return True


@dataclass(frozen=True)
class FieldSet:
    clause: str
    params: tuple
    fields: Tuple[str, ...]


def build_field_set(
    allowed: FieldMap,
    values: Mapping[str, Any],
    key_values: Sequence[Any] = (),
) -> FieldSet:
    """Build ``col = %s, ...`` and its parameters, with ``key_values`` appended last."""
    assignments = []
    params = []
    fields = []
    for argument, column in allowed:
        value = values.get(argument)
        if not is_present(value):
            continue
        assignments.append(f"{column} = {PLACEHOLDER}")
        params.append(value)
        fields.append(argument)
    if not assignments:
        names = ", ".join(argument for argument, _ in allowed)
        raise NothingToUpdateError(f"nothing to update: supply at least one of {names}")
    params.extend(key_values)
    return FieldSet(clause=", ".join(assignments), params=tuple(params), fields=tuple(fields))


def build_conditions(allowed: FieldMap, values: Mapping[str, Any]) -> Tuple[str, tuple]:
    """Build `` AND cond ...`` for every supplied filter; empty when none is supplied."""
    clauses = []
    params = []
    for argument, condition in allowed:
        value = values.get(argument)
        if is_present(value):
            clauses.append(f" AND {condition}")
            params.append(value)
    return "".join(clauses), tuple(params)
