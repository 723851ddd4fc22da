"""Attendance tool handlers.

Every handler takes an open :class:`~attendance_mcp.db.Session` and the validated
argument bag, and returns a :class:`RowSet` or :class:`MutationSummary`.
"""

from __future__ import annotations

from typing import Any, Dict

from ..db import Session
from ..errors import InvalidArgumentError, RowNotFoundError
from ..logging import get_logger
from . import statements
from .approval import decide_leave_request
from .fields import (
    BALANCE_UPDATE_FIELDS,
    EMPLOYEE_UPDATE_FIELDS,
    LEAVE_REQUEST_FILTERS,
    build_conditions,
    build_field_set,
    is_present,
)
from .guard import check_statement, leading_keyword
from .helpers import resolve_leave_type_id
from .schemas import MutationSummary, RowSet

LOGGER = get_logger(__name__)

Arguments = Dict[str, Any]


# --- schema and free-form queries ---


def tool_get_tables_info(session: Session, args: Arguments) -> RowSet:
    rows = session.execute(statements.TABLES_INFO).rows
    return RowSet(label="Tables in database", rows=rows)


def tool_get_table_structure(session: Session, args: Arguments) -> RowSet:
    table_name = args["table_name"]
    rows = session.execute(statements.TABLE_STRUCTURE, (table_name,)).rows
    if not rows:
        raise RowNotFoundError(f"table not found: {table_name}")
    return RowSet(label=f"Structure of table {table_name}", rows=rows)


def _run_free_form(session: Session, sql: str) -> RowSet | MutationSummary:
    # Caller SQL runs verbatim; the write guard has already been applied.
    result = session.execute(sql)
    if result.has_rows:
        return RowSet(label="Query results", rows=result.rows)
    keyword = leading_keyword(sql).upper() or "statement"
    return MutationSummary(
        label="Operation completed",
        affected_rows=result.affected_rows,
        inserted_id=result.inserted_id,
        message=f"Executed {keyword}",
    )


def tool_query_database(session: Session, args: Arguments) -> RowSet | MutationSummary:
    sql = args["sql"]
    check_statement(sql, confirm_write=args.get("confirm_write", False))
    return _run_free_form(session, sql)


def tool_query_database_read_only(session: Session, args: Arguments) -> RowSet | MutationSummary:
    sql = args["sql"]
    check_statement(sql, read_only=True)
    return _run_free_form(session, sql)


# --- employees ---


def tool_get_employee_info(session: Session, args: Arguments) -> RowSet:
    employee_id = args.get("employee_id")
    if is_present(employee_id):
        rows = session.execute(statements.EMPLOYEE_BY_ID, (employee_id,)).rows
    else:
        rows = session.execute(statements.ALL_EMPLOYEES).rows
    return RowSet(label="Employee information", rows=rows)


def tool_add_employee(session: Session, args: Arguments) -> MutationSummary:
    result = session.execute(
        statements.INSERT_EMPLOYEE,
        (
            args["employee_id"],
            args["employee_name"],
            args["department"],
            args["position"],
            args["hire_date"],
            args.get("email") if is_present(args.get("email")) else None,
            args.get("phone") if is_present(args.get("phone")) else None,
        ),
    )
    return MutationSummary(
        label="Employee added",
        affected_rows=result.affected_rows,
        message="Employee record created",
        details={"employee_id": args["employee_id"], "employee_name": args["employee_name"]},
    )


def tool_update_employee(session: Session, args: Arguments) -> MutationSummary:
    employee_id = args["employee_id"]
    field_set = build_field_set(EMPLOYEE_UPDATE_FIELDS, args, key_values=(employee_id,))
    sql = statements.UPDATE_EMPLOYEE.format(assignments=field_set.clause)
    result = session.execute(sql, field_set.params)
    if result.affected_rows == 0:
        raise RowNotFoundError(f"employee not found: {employee_id}")
    return MutationSummary(
        label="Employee updated",
        affected_rows=result.affected_rows,
        message="Employee record updated",
        details={"employee_id": employee_id, "updated_fields": list(field_set.fields)},
    )


def tool_deactivate_employee(session: Session, args: Arguments) -> MutationSummary:
    employee_id = args["employee_id"]
    result = session.execute(statements.DEACTIVATE_EMPLOYEE, (employee_id,))
    if result.affected_rows == 0:
        raise RowNotFoundError(f"no active employee found: {employee_id}")
    return MutationSummary(
        label="Employee deactivated",
        affected_rows=result.affected_rows,
        message=f"Employee {employee_id} set to inactive",
        details={"employee_id": employee_id},
    )


# --- leave balances ---


def tool_get_leave_balance(session: Session, args: Arguments) -> RowSet:
    employee_id = args["employee_id"]
    year = args["year"]
    rows = session.execute(statements.LEAVE_BALANCES_FOR_YEAR, (employee_id, year)).rows
    return RowSet(label=f"Leave balance of employee {employee_id} for {year}", rows=rows)


def tool_update_leave_balance(session: Session, args: Arguments) -> MutationSummary:
    employee_id = args["employee_id"]
    year = args["year"]
    with session.transaction():
        leave_type_id = resolve_leave_type_id(session, args["leave_type_code"])
        key = (employee_id, leave_type_id, year)
        existing = session.execute(statements.BALANCE_ID_BY_KEY, key).rows
        if existing:
            field_set = build_field_set(BALANCE_UPDATE_FIELDS, args, key_values=key)
            sql = statements.UPDATE_BALANCE.format(assignments=field_set.clause)
            result = session.execute(sql, field_set.params)
            operation = "updated"
        else:
            total_days = args.get("total_days")
            used_days = args.get("used_days")
            result = session.execute(
                statements.INSERT_BALANCE,
                (
                    employee_id,
                    leave_type_id,
                    year,
                    total_days if is_present(total_days) else 0,
                    used_days if is_present(used_days) else 0,
                ),
            )
            operation = "created"
    return MutationSummary(
        label="Leave balance saved",
        affected_rows=result.affected_rows,
        inserted_id=result.inserted_id if operation == "created" else None,
        message=f"Leave balance {operation}",
        details={
            "employee_id": employee_id,
            "leave_type": args["leave_type_code"],
            "year": year,
            "operation": operation,
        },
    )


# --- leave requests ---


def tool_get_leave_requests(session: Session, args: Arguments) -> RowSet:
    conditions, params = build_conditions(LEAVE_REQUEST_FILTERS, args)
    sql = statements.LEAVE_REQUESTS.format(conditions=conditions)
    rows = session.execute(sql, params).rows
    return RowSet(label="Leave requests", rows=rows)


def tool_submit_leave_request(session: Session, args: Arguments) -> MutationSummary:
    start_date = args["start_date"]
    end_date = args["end_date"]
    if end_date < start_date:
        raise InvalidArgumentError(f"end_date {end_date} is before start_date {start_date}")
    leave_type_id = resolve_leave_type_id(session, args["leave_type_code"])
    reason = args.get("reason")
    result = session.execute(
        statements.INSERT_LEAVE_REQUEST,
        (
            args["employee_id"],
            leave_type_id,
            start_date,
            end_date,
            args["days_requested"],
            reason if is_present(reason) else None,
        ),
    )
    LOGGER.info("leave_request_submitted", request_id=result.inserted_id, employee_id=args["employee_id"])
    return MutationSummary(
        label="Leave request submitted",
        affected_rows=result.affected_rows,
        inserted_id=result.inserted_id,
        message="Leave request is pending approval",
        details={
            "request_id": result.inserted_id,
            "employee_id": args["employee_id"],
            "leave_type": args["leave_type_code"],
            "period": f"{start_date} to {end_date}",
            "days": args["days_requested"],
            "status": "pending",
        },
    )


def tool_approve_leave_request(session: Session, args: Arguments) -> MutationSummary:
    return decide_leave_request(session, args["request_id"], args["action"], args["approved_by"])


def tool_cancel_leave_request(session: Session, args: Arguments) -> MutationSummary:
    request_id = args["request_id"]
    result = session.execute(statements.CANCEL_REQUEST, (request_id,))
    if result.affected_rows == 0:
        raise RowNotFoundError(f"no cancellable request found: request_id={request_id}")
    return MutationSummary(
        label="Leave request cancelled",
        affected_rows=result.affected_rows,
        message=f"Leave request {request_id} cancelled",
        details={"request_id": request_id},
    )
