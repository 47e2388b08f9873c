"""
Recovery of human-readable text from tool results.

Tool results reached the client in three shapes over the backend's history:
clean JSON objects, JSON objects stringified a second time, and malformed or
truncated JSON. Parsing degrades through all three without raising:

1. Structural parse as a JSON object
2. One extra unwrap when the parse yields a string
3. The character scanner from ``json_scan`` on whatever text is left
"""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from .json_scan import extract_json_string_field, unwrap_json_string_literal

_OUTPUT_KEYS = ("output", "result", "stdout")


@dataclass(frozen=True)
class StructuredToolResult:
    """Fields recovered from a tool result. At least one is set."""

    command: str | None = None
    title: str | None = None
    output: str | None = None

    def field_count(self) -> int:
        return sum(value is not None for value in (self.command, self.title, self.output))


def render_output(value: Any) -> str | None:
    """
    Render an arbitrary tool-result value as text.

    Strings pass through, numbers and booleans are stringified, lists render
    entry by entry joined by newlines, and mappings are probed for
    ``output``, ``result`` then ``stdout`` before falling back to their JSON
    form. None and empty values render as None.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, int):
        return str(value)
    if isinstance(value, float):
        return _render_number(value)
    if isinstance(value, list):
        if not value:
            return None
        return "\n".join(render_output(item) or _stringify(item) for item in value)
    if isinstance(value, Mapping):
        if not value:
            return None
        for key in _OUTPUT_KEYS:
            rendered = render_output(value.get(key))
            if rendered is not None:
                return rendered
        return _stringify(value)
    return _stringify(value)


def parse_structured_tool_result(result: str | None) -> StructuredToolResult | None:
    """
    Extract command, title and output from a serialized tool result.

    Returns None when no field can be recovered, including when ``result``
    is valid JSON without any of the known fields.
    """
    if not result:
        return None

    record = _parse_record(result)
    if record is not None:
        return _from_record(record)

    return _scan_fields_with_unwrap(result)


def pick_non_empty_string(value: Any) -> str | None:
    """Stripped string, or None for non-strings and blank strings."""
    if not isinstance(value, str):
        return None
    stripped = value.strip()
    return stripped or None


def _parse_record(text: str) -> Mapping[str, Any] | None:
    try:
        parsed = json.loads(text)
        if isinstance(parsed, str):
            # One level of double-encoding, never more
            parsed = json.loads(parsed)
    except (ValueError, RecursionError):
        return None
    return parsed if isinstance(parsed, Mapping) else None


def _from_record(record: Mapping[str, Any]) -> StructuredToolResult | None:
    metadata = _sub_record(record, "metadata")
    args = _sub_record(record, "args")

    command = _first_non_empty(
        record.get("command"), metadata.get("command"), args.get("command")
    )
    title = _first_non_empty(
        record.get("title"),
        record.get("summary"),
        metadata.get("title"),
        args.get("title"),
    )
    output = _first_non_empty(
        render_output(record.get("output")), render_output(record.get("result"))
    )

    parsed = StructuredToolResult(command=command, title=title, output=output)
    return parsed if parsed.field_count() else None


def _scan_fields_with_unwrap(text: str) -> StructuredToolResult | None:
    best = _scan_fields(text)

    inner = unwrap_json_string_literal(text)
    if inner is not None:
        nested = _scan_fields(inner)
        if nested.field_count() > best.field_count():
            best = nested

    return best if best.field_count() else None


def _scan_fields(text: str) -> StructuredToolResult:
    def scan(*names: str) -> str | None:
        return _first_non_empty(*(extract_json_string_field(text, n) for n in names))

    return StructuredToolResult(
        command=scan("command"),
        title=scan("title", "summary"),
        output=scan("output", "result"),
    )


def _sub_record(record: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    value = record.get(key)
    return value if isinstance(value, Mapping) else {}


def _first_non_empty(*values: Any) -> str | None:
    for value in values:
        picked = pick_non_empty_string(value)
        if picked is not None:
            return picked
    return None


def _render_number(value: float) -> str:
    # Integral floats drop ".0"; inf and nan use the json.dumps spelling
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value.is_integer():
        return str(int(value))
    return str(value)


def _stringify(value: Any) -> str:
    try:
        return json.dumps(value, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return str(value)
