"""
UI-ready state for hydrated tool calls.

Maps a DisplayToolCall onto the status/glyph/label/detail tuple the tool
rows of the timeline render. Pure data; no styling decisions beyond the
theme token name.
"""

from __future__ import annotations

import json
import re
from dataclasses import dataclass
from typing import Any, Literal

from timeline.config import TimelineConfig
from timeline.hydration.types import DisplayToolCall, ToolCallStatus

from .simplified import build_simplified_tool_text

ToolVisualStatus = Literal["queued", "running", "success", "error"]

_GLYPHS: dict[ToolVisualStatus, str] = {
    "queued": "◎",
    "running": "◎",
    "success": "✦",
    "error": "✧",
}

_COLOR_TOKENS: dict[ToolVisualStatus, str] = {
    "queued": "glyph.tool.running",
    "running": "glyph.tool.running",
    "success": "glyph.tool.done",
    "error": "glyph.tool.error",
}

_DISPLAY_TO_VISUAL: dict[ToolCallStatus, ToolVisualStatus] = {
    "pending": "queued",
    "running": "running",
    "complete": "success",
    "error": "error",
}


@dataclass(frozen=True)
class ToolVisualState:
    id: str
    tool_name: str
    status: ToolVisualStatus
    glyph: str
    label: str
    color_token: str
    detail: str | None
    expanded: bool
    has_detail: bool


def display_tool_call_to_visual_state(
    call: DisplayToolCall,
    expanded: bool,
    config: TimelineConfig | None = None,
) -> ToolVisualState:
    """
    Build the visual state of a display tool call.

    Args:
        call: Tool call from a DisplayMessage
        expanded: Whether the row is expanded; ignored when there is no detail
        config: Wrap and truncation settings, defaults when omitted

    Returns:
        ToolVisualState ready for rendering
    """
    config = config or TimelineConfig()
    status = _DISPLAY_TO_VISUAL[call.status]
    detail = _build_detail(call, config)

    return ToolVisualState(
        id=call.id,
        tool_name=call.name,
        status=status,
        glyph=_GLYPHS[status],
        label=_build_label(status, format_tool_label(call.name), call),
        color_token=_COLOR_TOKENS[status],
        detail=detail,
        expanded=expanded and detail is not None,
        has_detail=detail is not None,
    )


def format_tool_label(tool_name: str) -> str:
    """
    Humanize a tool name: ``fs.read_file`` becomes ``Read file``.

    Uses the last ``.``/``/`` separated segment; empty names become ``Tool``.
    """
    parts = [part for part in re.split(r"[./]", tool_name) if part]
    tail = parts[-1] if parts else tool_name
    normalized = re.sub(r"[-_]+", " ", tail).strip()
    if not normalized:
        return "Tool"
    return normalized[0].upper() + normalized[1:]


def truncate_detail(value: str, max_length: int) -> str:
    if len(value) <= max_length:
        return value
    return f"{value[:max_length]}..."


def _build_label(status: ToolVisualStatus, tool_label: str, call: DisplayToolCall) -> str:
    if status == "queued":
        return f"Queued {tool_label}..."
    if status == "running":
        return f"Running {tool_label}..."
    if status == "success":
        return f"{tool_label} complete"
    error_text = call.result if call.result and call.is_error else "unknown error"
    return f"{tool_label} failed: {error_text}"


def _build_detail(call: DisplayToolCall, config: TimelineConfig) -> str | None:
    simplified = build_simplified_tool_text(
        call.args,
        call.result,
        call.result if call.is_error else None,
        max_line_length=config.wrap_column,
    )
    if simplified is not None:
        return truncate_detail(simplified, config.detail_max_length)

    sections: list[str] = []
    if call.args is not None:
        sections.append(f"Args:\n{_pretty(call.args)}")
    if call.result:
        sections.append(f"Result:\n{call.result}")

    if not sections:
        return None
    return truncate_detail("\n\n".join(sections), config.detail_max_length)


def _pretty(value: Any) -> str:
    try:
        return json.dumps(value, indent=2, ensure_ascii=False)
    except (TypeError, ValueError):
        return str(value)
