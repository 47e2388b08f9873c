"""Projection of hydrated history messages into the UI display model."""

from __future__ import annotations

from collections.abc import Sequence
from datetime import datetime, timedelta, timezone

from .types import (
    DisplayContentBlock,
    DisplayMessage,
    DisplayTextBlock,
    DisplayToolCall,
    DisplayToolCallBlock,
    HistoryBlock,
    HydratedMessage,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def hydrated_message_to_display_message(hydrated: HydratedMessage) -> DisplayMessage:
    """
    Convert a hydrated history message into the DisplayMessage shape.

    Hydrated history is never streaming. Empty tool call and content block
    lists are reported as None.
    """
    tool_calls = _blocks_to_tool_calls(hydrated.payload.blocks)
    content_blocks = _blocks_to_content_blocks(hydrated.payload.blocks)

    return DisplayMessage(
        id=hydrated.id,
        role=hydrated.role,
        content=hydrated.payload.text,
        created_at=_EPOCH + timedelta(milliseconds=hydrated.ordering.timestamp_ms),
        tool_calls=tool_calls or None,
        content_blocks=content_blocks or None,
        is_streaming=False,
    )


def _blocks_to_tool_calls(blocks: Sequence[HistoryBlock]) -> list[DisplayToolCall]:
    """
    Pair tool-use blocks with their results by tool_call_id.

    First pass collects calls, second pass attaches results, so a result
    listed before its call still pairs. Results without a call are ignored.
    """
    tool_calls: list[DisplayToolCall] = []
    by_id: dict[str, DisplayToolCall] = {}

    for block in blocks:
        if isinstance(block, ToolUseBlock):
            call = DisplayToolCall(
                id=block.tool_call_id,
                name=block.name,
                status="complete",
                args=block.args,
            )
            by_id[block.tool_call_id] = call
            tool_calls.append(call)

    for block in blocks:
        if isinstance(block, ToolResultBlock):
            call = by_id.get(block.tool_call_id)
            if call is None:
                continue
            call.result = block.output
            call.is_error = block.is_error
            call.status = "error" if block.is_error else "complete"

    return tool_calls


def _blocks_to_content_blocks(
    blocks: Sequence[HistoryBlock],
) -> list[DisplayContentBlock]:
    content: list[DisplayContentBlock] = []
    for block in blocks:
        if isinstance(block, TextBlock):
            content.append(DisplayTextBlock(text=block.text))
        else:
            # Result data is folded into tool_calls; keep the slot for ordering
            content.append(DisplayToolCallBlock(tool_call_id=block.tool_call_id))
    return content
