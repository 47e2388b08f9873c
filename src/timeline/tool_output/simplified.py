"""Terminal-style summaries of tool calls: ``$ command`` followed by output."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from .structured import parse_structured_tool_result, pick_non_empty_string

DEFAULT_WRAP_COLUMN = 120


def wrap_long_lines(value: str, max_line_length: int = DEFAULT_WRAP_COLUMN) -> str:
    """
    Hard-wrap every line longer than max_line_length.

    Lines are cut at fixed widths with no regard for word boundaries.
    """
    wrapped: list[str] = []
    for line in value.split("\n"):
        if len(line) <= max_line_length:
            wrapped.append(line)
            continue
        wrapped.extend(
            line[start : start + max_line_length]
            for start in range(0, len(line), max_line_length)
        )
    return "\n".join(wrapped)


def build_simplified_tool_text(
    args: Mapping[str, Any] | None,
    result: str | None,
    error: str | None,
    max_line_length: int = DEFAULT_WRAP_COLUMN,
) -> str | None:
    """
    Build a short human-readable summary of a tool call.

    Priority:
    - error: ``$ command`` (when known) followed by the error text
    - command and output: ``$ command`` followed by the output
    - output only
    - command only

    The command comes from ``args["command"]`` first, then from the parsed
    result. If the result has no recognizable structure it is used verbatim
    as output.

    Returns None when there is nothing to show.
    """
    structured = parse_structured_tool_result(result)
    command = pick_non_empty_string(args.get("command") if args else None)
    if command is None and structured is not None:
        command = structured.command
    output = structured.output if structured is not None else result

    if error:
        text = f"$ {command}\n{error}" if command else error
        return wrap_long_lines(text, max_line_length)

    if command and output:
        return wrap_long_lines(f"$ {command}\n{output}", max_line_length)

    if output:
        return wrap_long_lines(output, max_line_length)

    if command:
        return f"$ {command}"

    return None
