"""The attendance tool catalog, built once at startup."""

from __future__ import annotations

from decimal import Decimal
from types import MappingProxyType
from typing import List, Mapping

from . import statements
from . import tools
from .schemas import ArgumentSpec, ToolDefinition

ZERO = Decimal("0")


def _employee_id(description: str = "Employee ID", required: bool = True) -> ArgumentSpec:
    return ArgumentSpec(name="employee_id", type="string", description=description, required=required)


def _request_id() -> ArgumentSpec:
    return ArgumentSpec(name="request_id", type="integer", description="Leave request ID", required=True)


def _leave_type_code() -> ArgumentSpec:
    return ArgumentSpec(name="leave_type_code", type="string", description="Leave type code", required=True)


def build_tool_specs(default_year: int, read_only: bool = False) -> List[ToolDefinition]:
    """Return the tool definitions in listing order.

    In read-only mode only the read tools are exposed and ``query_database``
    accepts nothing but known read statements.
    """
    if read_only:
        query_database = ToolDefinition(
            name="query_database",
            description="Run a SQL query against the attendance database (SELECT statements only).",
            arguments=(ArgumentSpec(name="sql", description="SQL query to run", required=True),),
            handler=tools.tool_query_database_read_only,
        )
    else:
        query_database = ToolDefinition(
            name="query_database",
            description=(
                "Run a SQL statement against the attendance database. Statements other than "
                "SELECT require confirm_write=true."
            ),
            arguments=(
                ArgumentSpec(name="sql", description="SQL statement to run", required=True),
                ArgumentSpec(
                    name="confirm_write",
                    type="boolean",
                    description="Confirm a statement that modifies data",
                    default=False,
                ),
            ),
            read_only=False,
            handler=tools.tool_query_database,
        )

    specs = [
        ToolDefinition(
            name="get_tables_info",
            description="List the base tables of the attendance database with row estimates.",
            handler=tools.tool_get_tables_info,
        ),
        ToolDefinition(
            name="get_table_structure",
            description="Describe the columns of one table, including comments and keys.",
            arguments=(ArgumentSpec(name="table_name", description="Table name", required=True),),
            handler=tools.tool_get_table_structure,
        ),
        query_database,
        ToolDefinition(
            name="get_employee_info",
            description="List employees, optionally a single employee.",
            arguments=(_employee_id("Employee ID (optional)", required=False),),
            handler=tools.tool_get_employee_info,
        ),
        ToolDefinition(
            name="get_leave_balance",
            description="Show an employee's leave balances for one year.",
            arguments=(
                _employee_id(),
                ArgumentSpec(
                    name="year",
                    type="integer",
                    description=f"Balance year (default {default_year})",
                    default=default_year,
                ),
            ),
            handler=tools.tool_get_leave_balance,
        ),
        ToolDefinition(
            name="get_leave_requests",
            description="List leave requests, newest first, with optional filters.",
            arguments=(
                _employee_id("Employee ID (optional)", required=False),
                ArgumentSpec(
                    name="status",
                    description="Request status",
                    enum=statements.LEAVE_STATUSES,
                ),
                ArgumentSpec(name="start_date", type="date", description="Earliest start date (YYYY-MM-DD)"),
                ArgumentSpec(name="end_date", type="date", description="Latest end date (YYYY-MM-DD)"),
            ),
            handler=tools.tool_get_leave_requests,
        ),
        ToolDefinition(
            name="add_employee",
            description="Add an employee with status active.",
            arguments=(
                _employee_id(),
                ArgumentSpec(name="employee_name", description="Employee name", required=True),
                ArgumentSpec(name="department", description="Department", required=True),
                ArgumentSpec(name="position", description="Position", required=True),
                ArgumentSpec(name="hire_date", type="date", description="Hire date (YYYY-MM-DD)", required=True),
                ArgumentSpec(name="email", description="Email address (optional)"),
                ArgumentSpec(name="phone", description="Phone number (optional)"),
            ),
            read_only=False,
            handler=tools.tool_add_employee,
        ),
        ToolDefinition(
            name="update_employee",
            description="Update the supplied fields of an employee.",
            arguments=(
                _employee_id(),
                ArgumentSpec(name="employee_name", description="Employee name (optional)"),
                ArgumentSpec(name="department", description="Department (optional)"),
                ArgumentSpec(name="position", description="Position (optional)"),
                ArgumentSpec(name="email", description="Email address (optional)"),
                ArgumentSpec(name="phone", description="Phone number (optional)"),
                ArgumentSpec(
                    name="status",
                    description="Employee status (optional)",
                    enum=statements.EMPLOYEE_STATUSES,
                ),
            ),
            read_only=False,
            handler=tools.tool_update_employee,
        ),
        ToolDefinition(
            name="deactivate_employee",
            description="Mark an active employee as inactive.",
            arguments=(_employee_id(),),
            read_only=False,
            handler=tools.tool_deactivate_employee,
        ),
        ToolDefinition(
            name="submit_leave_request",
            description="Submit a pending leave request.",
            arguments=(
                _employee_id(),
                _leave_type_code(),
                ArgumentSpec(name="start_date", type="date", description="First day of leave (YYYY-MM-DD)", required=True),
                ArgumentSpec(name="end_date", type="date", description="Last day of leave (YYYY-MM-DD)", required=True),
                ArgumentSpec(
                    name="days_requested",
                    type="number",
                    description="Number of days requested",
                    required=True,
                    minimum=ZERO,
                    exclusive_minimum=True,
                ),
                ArgumentSpec(name="reason", description="Reason (optional)"),
            ),
            read_only=False,
            handler=tools.tool_submit_leave_request,
        ),
        ToolDefinition(
            name="approve_leave_request",
            description="Approve or reject a pending leave request.",
            arguments=(
                _request_id(),
                ArgumentSpec(
                    name="action",
                    description="Decision",
                    required=True,
                    enum=statements.APPROVAL_ACTIONS,
                ),
                ArgumentSpec(name="approved_by", description="Approver employee ID", required=True),
            ),
            read_only=False,
            handler=tools.tool_approve_leave_request,
        ),
        ToolDefinition(
            name="cancel_leave_request",
            description="Cancel a pending or approved leave request.",
            arguments=(_request_id(),),
            read_only=False,
            handler=tools.tool_cancel_leave_request,
        ),
        ToolDefinition(
            name="update_leave_balance",
            description="Create or update an employee's leave allowance for one year.",
            arguments=(
                _employee_id(),
                _leave_type_code(),
                ArgumentSpec(name="year", type="integer", description="Balance year", required=True),
                ArgumentSpec(name="total_days", type="number", description="Total days (optional)", minimum=ZERO),
                ArgumentSpec(name="used_days", type="number", description="Used days (optional)", minimum=ZERO),
            ),
            read_only=False,
            handler=tools.tool_update_leave_balance,
        ),
    ]
    if read_only:
        specs = [spec for spec in specs if spec.read_only]
    return specs


def build_catalog(default_year: int, read_only: bool = False) -> Mapping[str, ToolDefinition]:
    specs = build_tool_specs(default_year, read_only=read_only)
    return MappingProxyType({spec.name: spec for spec in specs})
