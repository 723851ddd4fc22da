"""Map tool calls onto catalogued handlers and always answer with one envelope."""

from __future__ import annotations

from typing import Any, Dict, List, Mapping, Optional

from ..db import Database
from ..errors import ErrorKind, MissingArgumentError, ToolError, UnknownToolError
from ..logging import bound_contextvars, get_logger
from .fields import is_present
from .formatter import format_failure, format_result
from .schemas import Envelope, ToolDefinition

LOGGER = get_logger(__name__)


def bind_arguments(definition: ToolDefinition, arguments: Mapping[str, Any]) -> Dict[str, Any]:
    """Check required arguments in declaration order, apply defaults, coerce types.

    Only declared arguments are kept; anything else in the bag is dropped.
    """
    for spec in definition.arguments:
        if spec.required and not is_present(arguments.get(spec.name)):
            raise MissingArgumentError(spec.name)

    bound: Dict[str, Any] = {}
    for spec in definition.arguments:
        value = arguments.get(spec.name)
        if is_present(value):
            bound[spec.name] = spec.coerce(value)
        else:
            bound[spec.name] = spec.default
    return bound


class ToolDispatcher:
    def __init__(self, catalog: Mapping[str, ToolDefinition], database: Database) -> None:
        self._catalog = catalog
        self._database = database

    def definitions(self) -> List[ToolDefinition]:
        return list(self._catalog.values())

    def resolve(self, name: str) -> ToolDefinition:
        try:
            return self._catalog[name]
        except KeyError:
            raise UnknownToolError(name) from None

    def dispatch(self, name: str, arguments: Optional[Mapping[str, Any]] = None) -> Envelope:
        """Run one tool call; failures come back as error envelopes, never as exceptions."""
        with bound_contextvars(tool=name):
            return self._dispatch(name, arguments or {})

    def _dispatch(self, name: str, arguments: Mapping[str, Any]) -> Envelope:
        try:
            definition = self.resolve(name)
            bound = bind_arguments(definition, arguments)
            with self._database.session() as session:
                result = definition.handler(session, bound)
            envelope = format_result(result)
        except ToolError as exc:
            LOGGER.warning("tool_failed", kind=exc.kind.value, error=str(exc))
            return format_failure(exc.kind, str(exc))
        except Exception as exc:  # noqa: BLE001
            LOGGER.exception("tool_crashed", error=str(exc))
            return format_failure(ErrorKind.INTERNAL, str(exc))
        LOGGER.info("tool_completed")
        return envelope
