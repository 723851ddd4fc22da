"""Retry policy helpers."""

from __future__ import annotations

from mysql.connector import errors as mysql_errors
from tenacity import RetryCallState, retry_if_exception_type

from ..logging import get_logger

LOGGER = get_logger(__name__)


def log_retry_attempt(retry_state: RetryCallState) -> None:
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    LOGGER.warning(
        "database_connect_retry",
        attempt=retry_state.attempt_number,
        error=str(exception),
    )


retry_on_connection_error = retry_if_exception_type(
    (mysql_errors.InterfaceError, mysql_errors.OperationalError)
)
