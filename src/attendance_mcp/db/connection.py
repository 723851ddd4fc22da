"""Per-call database sessions over MySQL."""

from __future__ import annotations

from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from typing import Any, Dict, Iterator, List, Optional, Sequence

import mysql.connector
from mysql.connector import errors as mysql_errors
from mysql.connector.constants import ClientFlag
from tenacity import retry, stop_after_attempt, wait_exponential

from ..errors import StoreError
from ..logging import get_logger
from ..settings import DatabaseSettings
from .retry import log_retry_attempt, retry_on_connection_error

LOGGER = get_logger(__name__)

Row = Dict[str, Any]


@dataclass
class StatementResult:
    rows: List[Row] = field(default_factory=list)
    affected_rows: int = 0
    inserted_id: Optional[int] = None
    has_rows: bool = False


class Session(ABC):
    """Statement execution bound to one acquired connection."""

    def execute(self, sql: str, params: Sequence[Any] = ()) -> StatementResult:
        LOGGER.debug("statement_executing", sql=" ".join(sql.split()), params=len(params))
        return self._execute(sql, tuple(params))

    @contextmanager
    def transaction(self) -> Iterator["Session"]:
        """Run the enclosed statements atomically; roll back and re-raise on any error."""
        self._begin()
        try:
            yield self
        except BaseException:
            self._rollback()
            raise
        self._commit()

    @abstractmethod
    def _execute(self, sql: str, params: tuple) -> StatementResult: ...

    @abstractmethod
    def _begin(self) -> None: ...

    @abstractmethod
    def _commit(self) -> None: ...

    @abstractmethod
    def _rollback(self) -> None: ...


class Database(ABC):
    """Factory of scoped sessions; every session is released on exit."""

    @abstractmethod
    def session(self) -> Any:
        """Context manager yielding a :class:`Session`."""


class MySQLSession(Session):
    def __init__(self, connection: Any) -> None:
        self._connection = connection

    def _execute(self, sql: str, params: tuple) -> StatementResult:
        cursor = self._connection.cursor(dictionary=True)
        try:
            # Without parameters the statement is sent verbatim, so literal '%' survives.
            if params:
                cursor.execute(sql, params)
            else:
                cursor.execute(sql)
            if cursor.with_rows:
                return StatementResult(rows=list(cursor.fetchall()), has_rows=True)
            return StatementResult(
                affected_rows=max(cursor.rowcount, 0),
                inserted_id=cursor.lastrowid or None,
            )
        except mysql_errors.Error as exc:
            raise StoreError(str(exc)) from exc
        finally:
            cursor.close()

    def _begin(self) -> None:
        try:
            self._connection.start_transaction()
        except mysql_errors.Error as exc:
            raise StoreError(str(exc)) from exc

    def _commit(self) -> None:
        try:
            self._connection.commit()
        except mysql_errors.Error as exc:
            raise StoreError(str(exc)) from exc

    def _rollback(self) -> None:
        try:
            self._connection.rollback()
        except mysql_errors.Error as exc:
            LOGGER.error("rollback_failed", error=str(exc))


class MySQLDatabase(Database):
    """Opens one MySQL connection per tool call."""

    def __init__(self, settings: DatabaseSettings) -> None:
        self.settings = settings

    @retry(
        retry=retry_on_connection_error,
        wait=wait_exponential(min=1, max=8),
        stop=stop_after_attempt(3),
        before_sleep=log_retry_attempt,
        reraise=True,
    )
    def _connect(self) -> Any:
        return mysql.connector.connect(
            host=self.settings.host,
            port=self.settings.port,
            user=self.settings.user,
            password=self.settings.password,
            database=self.settings.database,
            charset=self.settings.charset,
            connection_timeout=self.settings.connect_timeout,
            autocommit=True,
            # rowcount reports matched rows, not changed rows
            client_flags=[ClientFlag.FOUND_ROWS],
        )

    @contextmanager
    def session(self) -> Iterator[MySQLSession]:
        try:
            connection = self._connect()
        except mysql_errors.Error as exc:
            raise StoreError(f"database connection failed: {exc}") from exc
        try:
            yield MySQLSession(connection)
        finally:
            connection.close()
