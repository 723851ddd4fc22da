"""Render handler results and failures into the uniform response envelope."""

from __future__ import annotations

import json
from datetime import date, datetime, time, timedelta
from decimal import Decimal
from typing import Any, Dict, Union

from mcp.types import TextContent

from ..errors import ErrorKind
from .schemas import Envelope, MutationSummary, RowSet

HandlerResult = Union[RowSet, MutationSummary]


def _json_default(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat(sep=" ", timespec="seconds")
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, time):
        return value.isoformat()
    if isinstance(value, timedelta):
        return str(value)
    # exact decimal text, never routed through float
    if isinstance(value, Decimal):
        return str(value)
    if isinstance(value, (bytes, bytearray)):
        return value.decode("utf-8", errors="replace")
    if isinstance(value, set):
        return sorted(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


def render_payload(payload: Any) -> str:
    return json.dumps(payload, indent=2, ensure_ascii=False, default=_json_default)


def mutation_payload(summary: MutationSummary) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "affectedRows": summary.affected_rows,
        "insertedId": summary.inserted_id,
        "message": summary.message,
    }
    payload.update(summary.details)
    return payload


def format_result(result: HandlerResult) -> Envelope:
    if isinstance(result, RowSet):
        payload: Any = result.rows
    elif isinstance(result, MutationSummary):
        payload = mutation_payload(result)
    else:
        raise TypeError(f"Unsupported handler result: {type(result).__name__}")
    return Envelope(
        label=result.label,
        text=f"{result.label}:\n{render_payload(payload)}",
        payload=payload,
    )


def format_failure(kind: ErrorKind, message: str) -> Envelope:
    """Every error kind renders the same way: the label is the message prefixed ``Error:``."""
    return Envelope(
        label="Error",
        text=f"Error: {message}",
        payload=message,
        error_kind=ErrorKind(kind),
    )


def to_text_content(envelope: Envelope) -> TextContent:
    return TextContent(type="text", text=envelope.text)
