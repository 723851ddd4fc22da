"""Error kinds raised by tool handlers and converted at the dispatch boundary."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    UNKNOWN_TOOL = "unknown_tool"
    MISSING_ARGUMENT = "missing_argument"
    INVALID_ENUM = "invalid_enum"
    INVALID_ARGUMENT = "invalid_argument"
    WRITE_NOT_CONFIRMED = "write_not_confirmed"
    INVALID_LEAVE_TYPE_CODE = "invalid_leave_type_code"
    ROW_NOT_FOUND = "row_not_found"
    NOTHING_TO_UPDATE = "nothing_to_update"
    STORE_ERROR = "store_error"
    INTERNAL = "internal"


class ToolError(Exception):
    """Base class for every failure a tool call can report."""

    kind: ErrorKind = ErrorKind.INTERNAL


class UnknownToolError(ToolError):
    kind = ErrorKind.UNKNOWN_TOOL

    def __init__(self, name: str) -> None:
        super().__init__(f"unknown tool: {name}")
        self.name = name


class MissingArgumentError(ToolError):
    kind = ErrorKind.MISSING_ARGUMENT

    def __init__(self, argument: str) -> None:
        super().__init__(f"missing argument: {argument}")
        self.argument = argument


class InvalidEnumError(ToolError):
    kind = ErrorKind.INVALID_ENUM

    def __init__(self, argument: str, value: object, allowed: tuple[str, ...]) -> None:
        super().__init__(f"invalid value for {argument}: {value!r} (expected one of {', '.join(allowed)})")
        self.argument = argument


class InvalidArgumentError(ToolError):
    kind = ErrorKind.INVALID_ARGUMENT


class WriteNotConfirmedError(ToolError):
    kind = ErrorKind.WRITE_NOT_CONFIRMED


class InvalidLeaveTypeCodeError(ToolError):
    kind = ErrorKind.INVALID_LEAVE_TYPE_CODE

    def __init__(self, code: str) -> None:
        super().__init__(f"invalid leave type code: {code}")
        self.code = code


class RowNotFoundError(ToolError):
    kind = ErrorKind.ROW_NOT_FOUND


class NothingToUpdateError(ToolError):
    kind = ErrorKind.NOTHING_TO_UPDATE


class StoreError(ToolError):
    """Raised when the database rejects a statement or cannot be reached."""

    kind = ErrorKind.STORE_ERROR
