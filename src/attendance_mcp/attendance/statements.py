"""SQL templates for every catalogued attendance operation.

All values are bound through ``%s`` placeholders. Column names only ever come from the
fixed enumerations in :mod:`.fields`.
"""

from __future__ import annotations

PLACEHOLDER = "%s"

LEAVE_STATUSES = ("pending", "approved", "rejected", "cancelled")
APPROVAL_ACTIONS = ("approved", "rejected")
EMPLOYEE_STATUSES = ("active", "inactive")

# --- schema introspection ---

TABLES_INFO = """
    SELECT
        TABLE_NAME AS table_name,
        TABLE_COMMENT AS table_comment,
        TABLE_ROWS AS estimated_rows
    FROM information_schema.TABLES
    WHERE TABLE_SCHEMA = DATABASE() AND TABLE_TYPE = 'BASE TABLE'
    ORDER BY TABLE_NAME
"""

TABLE_STRUCTURE = """
    SELECT
        COLUMN_NAME AS column_name,
        DATA_TYPE AS data_type,
        IS_NULLABLE AS is_nullable,
        COLUMN_DEFAULT AS column_default,
        COLUMN_COMMENT AS column_comment,
        COLUMN_KEY AS column_key
    FROM information_schema.COLUMNS
    WHERE TABLE_SCHEMA = DATABASE() AND TABLE_NAME = %s
    ORDER BY ORDINAL_POSITION
"""

# --- employees ---

EMPLOYEE_COLUMNS = """
    SELECT
        employee_id,
        employee_name,
        department,
        position,
        hire_date,
        email,
        phone,
        status
    FROM employees
"""

ALL_EMPLOYEES = EMPLOYEE_COLUMNS + " ORDER BY employee_id"

EMPLOYEE_BY_ID = EMPLOYEE_COLUMNS + " WHERE employee_id = %s ORDER BY employee_id"

INSERT_EMPLOYEE = """
    INSERT INTO employees (
        employee_id, employee_name, department, position,
        hire_date, email, phone, status
    ) VALUES (%s, %s, %s, %s, %s, %s, %s, 'active')
"""

UPDATE_EMPLOYEE = "UPDATE employees SET {assignments} WHERE employee_id = %s"

DEACTIVATE_EMPLOYEE = """
    UPDATE employees
    SET status = 'inactive'
    WHERE employee_id = %s AND status = 'active'
"""

# --- leave types ---

LEAVE_TYPE_ID_BY_CODE = "SELECT leave_type_id FROM leave_types WHERE leave_type_code = %s"

# --- leave balances ---

LEAVE_BALANCES_FOR_YEAR = """
    SELECT
        e.employee_name,
        lt.leave_type_name,
        elb.year,
        elb.total_days,
        elb.used_days,
        elb.remaining_days
    FROM employee_leave_balances elb
    JOIN employees e ON elb.employee_id = e.employee_id
    JOIN leave_types lt ON elb.leave_type_id = lt.leave_type_id
    WHERE elb.employee_id = %s AND elb.year = %s
    ORDER BY lt.leave_type_id
"""

BALANCE_ID_BY_KEY = """
    SELECT balance_id FROM employee_leave_balances
    WHERE employee_id = %s AND leave_type_id = %s AND year = %s
"""

UPDATE_BALANCE = """
    UPDATE employee_leave_balances
    SET {assignments}
    WHERE employee_id = %s AND leave_type_id = %s AND year = %s
"""

INSERT_BALANCE = """
    INSERT INTO employee_leave_balances
        (employee_id, leave_type_id, year, total_days, used_days)
    VALUES (%s, %s, %s, %s, %s)
"""

INCREMENT_USED_DAYS = """
    UPDATE employee_leave_balances
    SET used_days = used_days + %s
    WHERE employee_id = %s AND leave_type_id = %s AND year = %s
"""

# --- leave requests ---

LEAVE_REQUESTS = """
    SELECT
        lr.request_id,
        e.employee_name,
        e.department,
        lt.leave_type_name,
        lr.start_date,
        lr.end_date,
        lr.days_requested,
        lr.reason,
        lr.status,
        approver.employee_name AS approved_by_name,
        lr.approved_at,
        lr.created_at
    FROM leave_requests lr
    JOIN employees e ON lr.employee_id = e.employee_id
    JOIN leave_types lt ON lr.leave_type_id = lt.leave_type_id
    LEFT JOIN employees approver ON lr.approved_by = approver.employee_id
    WHERE 1=1{conditions}
    ORDER BY lr.created_at DESC, lr.request_id DESC
"""

INSERT_LEAVE_REQUEST = """
    INSERT INTO leave_requests (
        employee_id, leave_type_id, start_date, end_date,
        days_requested, reason, status
    ) VALUES (%s, %s, %s, %s, %s, %s, 'pending')
"""

DECIDE_PENDING_REQUEST = """
    UPDATE leave_requests
    SET status = %s, approved_by = %s, approved_at = CURRENT_TIMESTAMP
    WHERE request_id = %s AND status = 'pending'
"""

REQUEST_FOR_BALANCE = """
    SELECT employee_id, leave_type_id, days_requested, start_date
    FROM leave_requests
    WHERE request_id = %s
"""

CANCEL_REQUEST = """
    UPDATE leave_requests
    SET status = 'cancelled'
    WHERE request_id = %s AND status IN ('pending', 'approved')
"""
