"""Leave approval: decide a pending request and charge the balance in one transaction."""

from __future__ import annotations

from ..db import Session
from ..errors import InvalidEnumError, RowNotFoundError
from ..logging import get_logger
from . import statements
from .helpers import year_of
from .schemas import MutationSummary

LOGGER = get_logger(__name__)


def decide_leave_request(session: Session, request_id: int, action: str, approved_by: str) -> MutationSummary:
    """Move a pending request to ``approved`` or ``rejected``.

    On approval the matching year's ``used_days`` is incremented by the request's
    ``days_requested``; the year comes from the request's start_date as stored now.
    A missing balance row leaves the increment at zero affected rows and the approval
    still commits. Any failure rolls back both steps and the request stays pending.
    """
    if action not in statements.APPROVAL_ACTIONS:
        raise InvalidEnumError("action", action, statements.APPROVAL_ACTIONS)

    balance_rows = 0
    charged_year = None
    with session.transaction():
        decided = session.execute(
            statements.DECIDE_PENDING_REQUEST, (action, approved_by, request_id)
        )
        if decided.affected_rows == 0:
            raise RowNotFoundError(f"no pending request found: request_id={request_id}")

        if action == "approved":
            rows = session.execute(statements.REQUEST_FOR_BALANCE, (request_id,)).rows
            if rows:
                request = rows[0]
                charged_year = year_of(request["start_date"])
                charged = session.execute(
                    statements.INCREMENT_USED_DAYS,
                    (
                        request["days_requested"],
                        request["employee_id"],
                        request["leave_type_id"],
                        charged_year,
                    ),
                )
                balance_rows = charged.affected_rows
                if balance_rows == 0:
                    # TODO: decide whether approval without a balance row should fail or create one
                    LOGGER.warning(
                        "leave_balance_missing",
                        request_id=request_id,
                        employee_id=request["employee_id"],
                        leave_type_id=request["leave_type_id"],
                        year=charged_year,
                    )

    LOGGER.info("leave_request_decided", request_id=request_id, action=action, balance_rows=balance_rows)
    return MutationSummary(
        label="Leave request processed",
        affected_rows=decided.affected_rows,
        message=f"Leave request {request_id} {action}",
        details={
            "request_id": request_id,
            "action": action,
            "approved_by": approved_by,
            "balanceYear": charged_year,
            "balanceRowsUpdated": balance_rows,
        },
    )
