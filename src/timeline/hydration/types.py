"""
Canonical hydration types.

The flow is:

    Transport batch  →  HydratedMessage  →  DisplayMessage
    (RawHistoryMessage)  (canonical)         (UI store)

Hydrated messages are the single canonical shape every historical wire
format is normalized into. Display messages are what the UI store consumes.
HydrationState is the cursor threaded through repeated chunk applications of
one reconnect session; it is frozen so an older cursor held by a caller never
changes underneath it.
"""

from __future__ import annotations

from collections.abc import Set
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Literal

from timeline.contracts import MessageRole

DropReason = Literal["invalid-created-at", "decode-failed"]
ToolCallStatus = Literal["pending", "running", "complete", "error"]


# --- Canonical blocks ---


@dataclass
class TextBlock:
    """A run of message text."""

    type: Literal["text"] = field(default="text", init=False)
    text: str


@dataclass
class ToolUseBlock:
    """A tool invocation."""

    type: Literal["tool-use"] = field(default="tool-use", init=False)
    tool_call_id: str
    name: str
    args: dict[str, Any] = field(default_factory=dict)


@dataclass
class ToolResultBlock:
    """Output of a tool invocation, paired to its call by tool_call_id."""

    type: Literal["tool-result"] = field(default="tool-result", init=False)
    tool_call_id: str
    output: str
    is_error: bool = False


HistoryBlock = TextBlock | ToolUseBlock | ToolResultBlock


# --- Hydrated messages ---


@dataclass
class HydratedPayload:
    text: str
    blocks: list[HistoryBlock] = field(default_factory=list)


@dataclass(frozen=True)
class MessageOrdering:
    """
    Sort key of a hydrated message.

    fallback_index is assigned at normalization time and breaks ties between
    messages whose timestamps collide.
    """

    timestamp_ms: int
    fallback_index: int


@dataclass
class HydratedMessage:
    id: str
    role: MessageRole
    created_at: str
    payload: HydratedPayload
    ordering: MessageOrdering
    dedupe_key: str


@dataclass(frozen=True)
class NormalizationContext:
    """What the normalizer needs to know about the session so far."""

    fallback_index: int
    seen_message_ids: Set[str]
    source: Literal["reload"] = "reload"


@dataclass(frozen=True)
class AcceptedResult:
    status: Literal["accepted"] = field(default="accepted", init=False)
    message: HydratedMessage


@dataclass(frozen=True)
class DroppedResult:
    status: Literal["dropped"] = field(default="dropped", init=False)
    reason: DropReason


@dataclass(frozen=True)
class DuplicateResult:
    status: Literal["duplicate"] = field(default="duplicate", init=False)
    dedupe_key: str


NormalizationResult = AcceptedResult | DroppedResult | DuplicateResult


@dataclass(frozen=True)
class HydrationState:
    """
    Idempotency cursor for one reconnect session.

    Never mutated: applying a chunk returns a new state. Calls against the
    same cursor must be serialized by the caller.
    """

    seen_message_ids: frozenset[str] = frozenset()
    next_fallback_index: int = 0


# --- Display model ---


@dataclass
class DisplayToolCall:
    id: str
    name: str
    status: ToolCallStatus
    args: dict[str, Any] | None = None
    result: str | None = None
    is_error: bool | None = None


@dataclass
class DisplayTextBlock:
    type: Literal["text"] = field(default="text", init=False)
    text: str


@dataclass
class DisplayToolCallBlock:
    """Placeholder for a tool call; its data lives in DisplayMessage.tool_calls."""

    type: Literal["tool-call"] = field(default="tool-call", init=False)
    tool_call_id: str


DisplayContentBlock = DisplayTextBlock | DisplayToolCallBlock


@dataclass
class DisplayMessage:
    id: str
    role: MessageRole
    content: str
    created_at: datetime
    tool_calls: list[DisplayToolCall] | None = None
    content_blocks: list[DisplayContentBlock] | None = None
    is_streaming: bool = False


@dataclass
class HydrationChunkResult:
    """Merged timeline plus the next cursor and per-message diagnostics."""

    messages: list[DisplayMessage]
    hydration_state: HydrationState
    accepted: list[HydratedMessage]
    dropped: list[DroppedResult]
    duplicates: list[DuplicateResult]
