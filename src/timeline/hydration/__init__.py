"""
History hydration for reconnecting chat sessions.

The main entry point is `apply_history_chunk()`, called once per batch of raw
history delivered by the transport layer. Thread the returned hydration state
into the next call of the same session.

Example:
    from timeline.hydration import apply_history_chunk, create_hydration_state

    state = create_hydration_state()
    messages = []
    for batch in batches:
        result = apply_history_chunk(messages, batch, state)
        messages, state = result.messages, result.hydration_state
"""

from .display import hydrated_message_to_display_message
from .escapes import decode_escaped_text
from .hydrator import (
    apply_history_chunk,
    create_hydration_state,
    sort_hydrated_history_messages,
)
from .normalizer import (
    DefaultHistoryPayloadNormalizer,
    HistoryPayloadNormalizer,
    build_dedupe_key,
    history_payload_normalizer,
    normalize_history_message,
    parse_timestamp_ms,
)
from .types import (
    AcceptedResult,
    DisplayContentBlock,
    DisplayMessage,
    DisplayTextBlock,
    DisplayToolCall,
    DisplayToolCallBlock,
    DroppedResult,
    DuplicateResult,
    HistoryBlock,
    HydratedMessage,
    HydratedPayload,
    HydrationChunkResult,
    HydrationState,
    MessageOrdering,
    NormalizationContext,
    NormalizationResult,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

__all__ = [
    "AcceptedResult",
    "DefaultHistoryPayloadNormalizer",
    "DisplayContentBlock",
    "DisplayMessage",
    "DisplayTextBlock",
    "DisplayToolCall",
    "DisplayToolCallBlock",
    "DroppedResult",
    "DuplicateResult",
    "HistoryBlock",
    "HistoryPayloadNormalizer",
    "HydratedMessage",
    "HydratedPayload",
    "HydrationChunkResult",
    "HydrationState",
    "MessageOrdering",
    "NormalizationContext",
    "NormalizationResult",
    "TextBlock",
    "ToolResultBlock",
    "ToolUseBlock",
    "apply_history_chunk",
    "build_dedupe_key",
    "create_hydration_state",
    "decode_escaped_text",
    "history_payload_normalizer",
    "hydrated_message_to_display_message",
    "normalize_history_message",
    "parse_timestamp_ms",
    "sort_hydrated_history_messages",
]
