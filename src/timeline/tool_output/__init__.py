"""
Tool output normalization.

Turns structured, double-encoded or malformed tool results into readable
text for the timeline:

    from timeline.tool_output import build_simplified_tool_text

    build_simplified_tool_text({"command": "ls"}, '{"output": "a.txt"}', None)
    # '$ ls\\na.txt'
"""

from .json_scan import extract_json_string_field, unwrap_json_string_literal
from .simplified import DEFAULT_WRAP_COLUMN, build_simplified_tool_text, wrap_long_lines
from .structured import (
    StructuredToolResult,
    parse_structured_tool_result,
    pick_non_empty_string,
    render_output,
)
from .visual import (
    ToolVisualState,
    display_tool_call_to_visual_state,
    format_tool_label,
    truncate_detail,
)

__all__ = [
    "DEFAULT_WRAP_COLUMN",
    "StructuredToolResult",
    "ToolVisualState",
    "build_simplified_tool_text",
    "display_tool_call_to_visual_state",
    "extract_json_string_field",
    "format_tool_label",
    "parse_structured_tool_result",
    "pick_non_empty_string",
    "render_output",
    "truncate_detail",
    "unwrap_json_string_literal",
    "wrap_long_lines",
]
