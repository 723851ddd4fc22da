"""Database execution capability used by the tool handlers."""

from .connection import Database, MySQLDatabase, Row, Session, StatementResult

__all__ = ["Database", "MySQLDatabase", "Row", "Session", "StatementResult"]
