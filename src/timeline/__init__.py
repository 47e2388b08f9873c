"""
Timeline - reconnect history hydration for a terminal chat client.

Contracts:
    RawHistoryMessage: History message as delivered by the transport layer

Hydration:
    apply_history_chunk: Normalize, sort, project and merge one batch
    create_hydration_state: Cursor for a new reconnect session
    normalize_history_message: Normalize a single raw message
    DisplayMessage: UI-facing message model

Tool output:
    build_simplified_tool_text: ``$ command`` + output summary of a tool call
    display_tool_call_to_visual_state: Glyph/label/detail for a tool row

Configuration:
    TimelineConfig, load_timeline_config

Example:
    from timeline import RawHistoryMessage, apply_history_chunk, create_hydration_state

    batch = [RawHistoryMessage.model_validate(item) for item in wire_items]
    result = apply_history_chunk([], batch, create_hydration_state())
    for message in result.messages:
        print(message.role, message.content)
"""

from .config import TimelineConfig, load_timeline_config
from .contracts import (
    RawHistoryMessage,
    RawSerializedPayload,
    RawStructuredPayload,
    StructuredValue,
)
from .hydration import (
    DisplayMessage,
    DisplayToolCall,
    HydratedMessage,
    HydrationChunkResult,
    HydrationState,
    apply_history_chunk,
    create_hydration_state,
    decode_escaped_text,
    history_payload_normalizer,
    normalize_history_message,
)
from .tool_output import (
    ToolVisualState,
    build_simplified_tool_text,
    display_tool_call_to_visual_state,
    parse_structured_tool_result,
    render_output,
)

__all__ = [
    # Contracts
    "RawHistoryMessage",
    "RawSerializedPayload",
    "RawStructuredPayload",
    "StructuredValue",
    # Hydration
    "DisplayMessage",
    "DisplayToolCall",
    "HydratedMessage",
    "HydrationChunkResult",
    "HydrationState",
    "apply_history_chunk",
    "create_hydration_state",
    "decode_escaped_text",
    "history_payload_normalizer",
    "normalize_history_message",
    # Tool output
    "ToolVisualState",
    "build_simplified_tool_text",
    "display_tool_call_to_visual_state",
    "parse_structured_tool_result",
    "render_output",
    # Configuration
    "TimelineConfig",
    "load_timeline_config",
]
