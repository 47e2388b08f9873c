"""
Chunk hydrator - the single entry point for reconnect history.

Applying a chunk:
1. Normalizes each raw message against a copy of the hydration state
2. Tracks duplicates and dropped entries
3. Sorts accepted messages by (timestamp, fallback index)
4. Projects them to display messages
5. Merges them behind the existing timeline, first write wins

Re-applying a chunk against the state it produced accepts nothing and leaves
the timeline unchanged.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence

from timeline.contracts import RawHistoryMessage

from .display import hydrated_message_to_display_message
from .normalizer import HistoryPayloadNormalizer, history_payload_normalizer
from .types import (
    AcceptedResult,
    DisplayMessage,
    DroppedResult,
    DuplicateResult,
    HydratedMessage,
    HydrationChunkResult,
    HydrationState,
    NormalizationContext,
)

logger = logging.getLogger(__name__)


def create_hydration_state() -> HydrationState:
    """Fresh cursor for a new reconnect session."""
    return HydrationState(seen_message_ids=frozenset(), next_fallback_index=0)


def sort_hydrated_history_messages(
    messages: Iterable[HydratedMessage],
) -> list[HydratedMessage]:
    """
    Sort by timestamp ascending, breaking ties with fallback index.

    Returns a new list; the input is not modified.
    """
    return sorted(
        messages,
        key=lambda m: (m.ordering.timestamp_ms, m.ordering.fallback_index),
    )


def apply_history_chunk(
    existing_messages: Sequence[DisplayMessage],
    incoming_raw_messages: Iterable[RawHistoryMessage],
    hydration_state: HydrationState,
    normalizer: HistoryPayloadNormalizer = history_payload_normalizer,
) -> HydrationChunkResult:
    """
    Apply one chunk of raw history to the current timeline.

    Args:
        existing_messages: Timeline currently held by the UI store
        incoming_raw_messages: Chunk from the transport layer, in delivery order
        hydration_state: Cursor returned by the previous call of this session
        normalizer: Payload normalizer, the default one unless overridden

    Returns:
        HydrationChunkResult with the merged timeline, the next cursor and the
        accepted/dropped/duplicate diagnostics of this chunk.
    """
    seen_ids = set(hydration_state.seen_message_ids)
    next_fallback_index = hydration_state.next_fallback_index

    accepted: list[HydratedMessage] = []
    dropped: list[DroppedResult] = []
    duplicates: list[DuplicateResult] = []

    for raw in incoming_raw_messages:
        context = NormalizationContext(
            fallback_index=next_fallback_index,
            seen_message_ids=seen_ids,
        )
        result = normalizer.normalize(raw, context)

        if isinstance(result, AcceptedResult):
            accepted.append(result.message)
            seen_ids.add(raw.id)
            next_fallback_index += 1
        elif isinstance(result, DroppedResult):
            # Dropped messages still take a slot so ordering stays stable
            dropped.append(result)
            next_fallback_index += 1
        else:
            duplicates.append(result)

    hydrated = [
        hydrated_message_to_display_message(m)
        for m in sort_hydrated_history_messages(accepted)
    ]

    existing_ids = {m.id for m in existing_messages}
    new_messages = [m for m in hydrated if m.id not in existing_ids]

    if existing_messages:
        merged = [*existing_messages, *new_messages]
    else:
        merged = new_messages

    logger.debug(
        f"Applied history chunk: accepted={len(accepted)}, dropped={len(dropped)}, "
        f"duplicates={len(duplicates)}, appended={len(new_messages)}, "
        f"next_fallback_index={next_fallback_index}"
    )

    return HydrationChunkResult(
        messages=merged,
        hydration_state=HydrationState(
            seen_message_ids=frozenset(seen_ids),
            next_fallback_index=next_fallback_index,
        ),
        accepted=accepted,
        dropped=dropped,
        duplicates=duplicates,
    )
