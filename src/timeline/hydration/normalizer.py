"""
History payload normalizer - converts one raw history message into its
canonical hydrated form.

This is the single source of truth for:
- Duplicate detection (checked before anything else)
- createdAt validation
- Decoding every historical payload format into text + canonical blocks

Formats handled:
- structured: current backend format, already a text + blocks object
- serialized/plain-text and serialized/json-escaped: strings carrying
  literal escape sequences
- serialized/json: a JSON document, possibly stringified one extra time by
  older backends

Normalization never raises. Every message ends up accepted, dropped with a
reason, or reported as a duplicate.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Iterable, Mapping
from datetime import datetime, timedelta, timezone
from typing import Any, Protocol, runtime_checkable

from pydantic import ValidationError

from timeline.contracts import (
    MessageRole,
    RawHistoryMessage,
    RawPayload,
    RawSerializedPayload,
    RawTextBlock,
    RawToolUseBlock,
    StructuredValue,
    raw_block_adapter,
)

from .escapes import decode_escaped_text
from .types import (
    AcceptedResult,
    DroppedResult,
    DuplicateResult,
    HistoryBlock,
    HydratedMessage,
    HydratedPayload,
    MessageOrdering,
    NormalizationContext,
    NormalizationResult,
    TextBlock,
    ToolResultBlock,
    ToolUseBlock,
)

logger = logging.getLogger(__name__)

LOG_PREFIX = "[history-hydration]"
_PREVIEW_CHARS = 100
_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


@runtime_checkable
class HistoryPayloadNormalizer(Protocol):
    """
    Normalizes raw history messages for the chunk hydrator.

    The default implementation is ``history_payload_normalizer``; tests and
    callers may supply their own.
    """

    def normalize(
        self, raw: RawHistoryMessage, context: NormalizationContext
    ) -> NormalizationResult:
        """Return accepted, dropped or duplicate for a single raw message."""
        ...


def build_dedupe_key(message_id: str, role: MessageRole) -> str:
    """Stable duplicate-suppression key for a logical message."""
    return f"{role}:{message_id}"


def parse_created_at(created_at: str) -> datetime | None:
    """
    Parse an ISO-8601 createdAt value into an aware UTC datetime.

    A trailing ``Z`` is accepted and naive values are read as UTC.
    Returns None when the value cannot be parsed or its UTC instant falls
    outside the datetime range.
    """
    value = created_at.strip()
    if value[-1:] in ("Z", "z"):
        value = value[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=timezone.utc)
    try:
        return parsed.astimezone(timezone.utc)
    except OverflowError:
        return None


def parse_timestamp_ms(created_at: str) -> int | None:
    """Epoch milliseconds of a createdAt value, or None if unparseable."""
    parsed = parse_created_at(created_at)
    if parsed is None:
        return None
    return (parsed - _EPOCH) // timedelta(milliseconds=1)


def normalize_history_message(
    raw: RawHistoryMessage,
    context: NormalizationContext,
) -> NormalizationResult:
    """
    Normalize a single raw history message into the canonical hydrated shape.

    Args:
        raw: Message as delivered by the transport layer
        context: Session bookkeeping (next fallback index, ids already seen)

    Returns:
        AcceptedResult with the hydrated message, DroppedResult with the
        reason it was discarded, or DuplicateResult if its id was seen before.
    """
    dedupe_key = build_dedupe_key(raw.id, raw.role)
    if raw.id in context.seen_message_ids:
        return DuplicateResult(dedupe_key=dedupe_key)

    timestamp_ms = parse_timestamp_ms(raw.created_at)
    if timestamp_ms is None:
        logger.debug(f"{LOG_PREFIX} invalid-created-at id={raw.id}: {raw.created_at!r}")
        return DroppedResult(reason="invalid-created-at")

    payload = _normalize_payload(raw.payload)
    if payload is None:
        return DroppedResult(reason="decode-failed")

    return AcceptedResult(
        message=HydratedMessage(
            id=raw.id,
            role=raw.role,
            created_at=raw.created_at,
            payload=payload,
            ordering=MessageOrdering(
                timestamp_ms=timestamp_ms,
                fallback_index=context.fallback_index,
            ),
            dedupe_key=dedupe_key,
        )
    )


class DefaultHistoryPayloadNormalizer(HistoryPayloadNormalizer):
    """Normalizer backed by :func:`normalize_history_message`."""

    def normalize(
        self, raw: RawHistoryMessage, context: NormalizationContext
    ) -> NormalizationResult:
        return normalize_history_message(raw, context)


history_payload_normalizer = DefaultHistoryPayloadNormalizer()


# --- Payload variants ---


def _normalize_payload(payload: RawPayload) -> HydratedPayload | None:
    if isinstance(payload, RawSerializedPayload):
        return _normalize_serialized_payload(payload)
    return _normalize_structured_payload(payload.value)


def _normalize_structured_payload(value: StructuredValue) -> HydratedPayload:
    text = decode_escaped_text(value.text or "")
    blocks = _normalize_blocks(value.blocks or [])
    return _with_text_block(text, blocks)


def _normalize_serialized_payload(
    payload: RawSerializedPayload,
) -> HydratedPayload | None:
    if payload.encoding in ("plain-text", "json-escaped"):
        return _text_payload(decode_escaped_text(payload.value))

    try:
        parsed = json.loads(payload.value)
    except (ValueError, RecursionError):
        logger.warning(
            f"{LOG_PREFIX} json-parse-failed: {payload.value[:_PREVIEW_CHARS]!r}"
        )
        return None

    if isinstance(parsed, str):
        recovered = _recover_double_encoded_structured(parsed)
        if recovered is not None:
            return _normalize_record(recovered)
        return _text_payload(decode_escaped_text(parsed))

    if isinstance(parsed, dict):
        return _normalize_record(parsed)

    logger.warning(
        f"{LOG_PREFIX} json-unsupported-shape: {type(parsed).__name__} "
        f"{payload.value[:_PREVIEW_CHARS]!r}"
    )
    return None


def _recover_double_encoded_structured(inner: str) -> dict[str, Any] | None:
    """
    Recover exactly one extra level of JSON encoding.

    Only an inner object carrying ``text`` or ``blocks`` counts as a
    structured payload; anything else stays plain text. Deeper nesting is
    not unwrapped.
    """
    if not inner.lstrip().startswith("{"):
        return None
    try:
        candidate = json.loads(inner)
    except (ValueError, RecursionError):
        return None
    if not isinstance(candidate, dict):
        return None
    if "text" not in candidate and "blocks" not in candidate:
        return None

    logger.warning(
        f"{LOG_PREFIX} double-encoded-structured: {inner[:_PREVIEW_CHARS]!r}"
    )
    return candidate


def _normalize_record(record: Mapping[str, Any]) -> HydratedPayload:
    raw_text = record.get("text")
    text = decode_escaped_text(raw_text) if isinstance(raw_text, str) else ""
    raw_blocks = record.get("blocks")
    blocks = _normalize_blocks(raw_blocks if isinstance(raw_blocks, list) else [])
    return _with_text_block(text, blocks)


def _normalize_blocks(raw_blocks: Iterable[Any]) -> list[HistoryBlock]:
    """Validate and convert raw blocks, skipping entries that don't validate."""
    blocks: list[HistoryBlock] = []

    for index, item in enumerate(raw_blocks):
        try:
            block = raw_block_adapter.validate_python(item)
        except ValidationError as e:
            logger.debug(
                f"{LOG_PREFIX} skipping invalid block #{index}: "
                f"{e.error_count()} validation error(s)"
            )
            continue

        if isinstance(block, RawTextBlock):
            blocks.append(TextBlock(text=decode_escaped_text(block.text)))
        elif isinstance(block, RawToolUseBlock):
            blocks.append(
                ToolUseBlock(
                    tool_call_id=block.tool_call_id,
                    name=block.name,
                    args=dict(block.args or {}),
                )
            )
        else:
            blocks.append(
                ToolResultBlock(
                    tool_call_id=block.tool_call_id,
                    output=decode_escaped_text(block.resolved_output()),
                    is_error=block.resolved_is_error(),
                )
            )

    return blocks


def _with_text_block(text: str, blocks: list[HistoryBlock]) -> HydratedPayload:
    """Synthesize a leading text block when text exists but no text block does."""
    if text and not any(isinstance(b, TextBlock) for b in blocks):
        blocks.insert(0, TextBlock(text=text))
    return HydratedPayload(text=text, blocks=blocks)


def _text_payload(text: str) -> HydratedPayload:
    return _with_text_block(text, [])
