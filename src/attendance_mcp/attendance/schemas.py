"""Pydantic models for attendance tool definitions and tool IO."""

from __future__ import annotations

from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field

from ..errors import ErrorKind, InvalidArgumentError, InvalidEnumError

_JSON_TYPES = {
    "string": {"type": "string"},
    "integer": {"type": "integer"},
    "number": {"type": "number"},
    "boolean": {"type": "boolean"},
    "date": {"type": "string", "format": "date"},
}

_TRUE_STRINGS = {"true", "1", "yes"}
_FALSE_STRINGS = {"false", "0", "no", ""}


class ArgumentSpec(BaseModel):
    """One declared argument of a tool."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: str = "string"
    description: str = ""
    required: bool = False
    default: Any = None
    enum: Optional[Tuple[str, ...]] = None
    minimum: Optional[Decimal] = None
    exclusive_minimum: bool = False

    def json_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = dict(_JSON_TYPES[self.type])
        if self.description:
            schema["description"] = self.description
        if self.enum:
            schema["enum"] = list(self.enum)
        if self.default is not None:
            schema["default"] = self.default
        if self.minimum is not None:
            key = "exclusiveMinimum" if self.exclusive_minimum else "minimum"
            schema[key] = float(self.minimum)
        return schema

    def coerce(self, value: Any) -> Any:
        """Convert a loosely-typed argument value, raising on anything unusable."""
        converted = getattr(self, f"_as_{self.type}")(value)
        if self.enum is not None and converted not in self.enum:
            raise InvalidEnumError(self.name, value, self.enum)
        if self.minimum is not None:
            too_small = converted <= self.minimum if self.exclusive_minimum else converted < self.minimum
            if too_small:
                bound = "greater than" if self.exclusive_minimum else "at least"
                raise InvalidArgumentError(f"{self.name} must be {bound} {self.minimum}")
        return converted

    def _invalid(self, value: Any, expected: str) -> InvalidArgumentError:
        return InvalidArgumentError(f"invalid value for {self.name}: {value!r} (expected {expected})")

    def _as_string(self, value: Any) -> str:
        if isinstance(value, str):
            return value
        if isinstance(value, (int, float, Decimal)) and not isinstance(value, bool):
            return str(value)
        raise self._invalid(value, "a string")

    def _as_integer(self, value: Any) -> int:
        if isinstance(value, bool):
            raise self._invalid(value, "an integer")
        if isinstance(value, int):
            return value
        if isinstance(value, float) and value.is_integer():
            return int(value)
        if isinstance(value, str):
            try:
                return int(value.strip())
            except ValueError:
                pass
        raise self._invalid(value, "an integer")

    def _as_number(self, value: Any) -> Decimal:
        if isinstance(value, bool) or not isinstance(value, (int, float, str, Decimal)):
            raise self._invalid(value, "a number")
        try:
            number = Decimal(str(value).strip())
        except InvalidOperation:
            raise self._invalid(value, "a number") from None
        if not number.is_finite():
            raise self._invalid(value, "a finite number")
        return number

    def _as_boolean(self, value: Any) -> bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, int) and value in (0, 1):
            return bool(value)
        if isinstance(value, str):
            lowered = value.strip().lower()
            if lowered in _TRUE_STRINGS:
                return True
            if lowered in _FALSE_STRINGS:
                return False
        raise self._invalid(value, "true or false")

    def _as_date(self, value: Any) -> str:
        if isinstance(value, date):
            return value.isoformat()
        if isinstance(value, str):
            text = value.strip()
            try:
                if len(text) == 10:
                    return date.fromisoformat(text).isoformat()
            except ValueError:
                pass
        raise self._invalid(value, "a date as YYYY-MM-DD")


class ToolDefinition(BaseModel):
    """A catalogued tool: its argument contract and the handler bound to it."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    name: str
    description: str
    arguments: Tuple[ArgumentSpec, ...] = ()
    read_only: bool = True
    handler: Callable[..., Any]

    def input_schema(self) -> Dict[str, Any]:
        schema: Dict[str, Any] = {
            "type": "object",
            "properties": {arg.name: arg.json_schema() for arg in self.arguments},
        }
        required = [arg.name for arg in self.arguments if arg.required]
        if required:
            schema["required"] = required
        return schema


class RowSet(BaseModel):
    label: str
    rows: List[Dict[str, Any]]


class MutationSummary(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    label: str
    affected_rows: int = Field(0, alias="affectedRows")
    inserted_id: Optional[int] = Field(None, alias="insertedId")
    message: str
    details: Dict[str, Any] = Field(default_factory=dict)


class Envelope(BaseModel):
    """The single text block returned for every tool call, success or failure."""

    label: str
    text: str
    payload: Any = None
    error_kind: Optional[ErrorKind] = None

    @property
    def is_error(self) -> bool:
        return self.error_kind is not None
