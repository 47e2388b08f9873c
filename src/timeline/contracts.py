"""
Raw history wire models.

The transport layer hands the hydrator batches of history messages exactly as
the backend emitted them. These models pin down the envelope (id, role,
createdAt, payload) and the three block shapes, while the payload itself keeps
its blocks as untyped entries. Blocks are validated one at a time during
normalization so a single malformed block never rejects the message that
carries it.

Example:
    raw = RawHistoryMessage.model_validate(
        {
            "id": "msg-1",
            "role": "assistant",
            "createdAt": "2026-01-15T10:00:00.000Z",
            "payload": {"kind": "serialized", "value": "Hi", "encoding": "plain-text"},
        }
    )
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator

MessageRole = Literal["user", "assistant", "system"]
SerializedEncoding = Literal["json", "json-escaped", "plain-text"]


# --- Raw blocks ---


class RawTextBlock(BaseModel):
    """Plain text block."""

    model_config = ConfigDict(frozen=True)

    type: Literal["text"]
    text: str


class RawToolUseBlock(BaseModel):
    """Tool invocation block."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["tool-use"]
    tool_call_id: str = Field(alias="toolCallId")
    name: str
    args: dict[str, Any] | None = None

    @field_validator("args", mode="before")
    @classmethod
    def non_mapping_args_are_absent(cls, value: Any) -> Any:
        # Older backends sent args as a list or a bare string
        return value if isinstance(value, dict) else None


class RawToolResultBlock(BaseModel):
    """
    Tool result block.

    Backends disagreed on field names over time: the output was written as
    either ``output`` or ``result`` and the error flag as either ``isError``
    or ``error``. Use :meth:`resolved_output` and :meth:`resolved_is_error`
    rather than reading the fields directly.
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type: Literal["tool-result"]
    tool_call_id: str = Field(alias="toolCallId")
    output: str | None = None
    result: str | None = None
    is_error: bool | None = Field(default=None, alias="isError")
    error: bool | None = None

    def resolved_output(self) -> str:
        """First non-absent of output, result; empty string otherwise."""
        return _coalesce(self.output, self.result, default="")

    def resolved_is_error(self) -> bool:
        """First non-absent of isError, error; False otherwise."""
        return _coalesce(self.is_error, self.error, default=False)


RawBlock = Annotated[
    Union[RawTextBlock, RawToolUseBlock, RawToolResultBlock],
    Field(discriminator="type"),
]

# Validates a single untyped block entry; raises pydantic.ValidationError
raw_block_adapter: TypeAdapter[RawBlock] = TypeAdapter(RawBlock)


def _coalesce(*values: Any, default: Any) -> Any:
    for value in values:
        if value is not None:
            return value
    return default


# --- Raw payloads ---


class StructuredValue(BaseModel):
    """Body of a structured payload: text plus optional raw blocks."""

    model_config = ConfigDict(frozen=True)

    text: str | None = None
    blocks: list[Any] | None = None


class RawStructuredPayload(BaseModel):
    """Current backend format: an already-structured body."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["structured"] = "structured"
    value: StructuredValue


class RawSerializedPayload(BaseModel):
    """
    Legacy backend format: the body is a string.

    The encoding is an explicit versioning signal telling which backend
    generation produced the message; the hydrator never sniffs it.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["serialized"] = "serialized"
    value: str
    encoding: SerializedEncoding


RawPayload = Annotated[
    Union[RawStructuredPayload, RawSerializedPayload],
    Field(discriminator="kind"),
]


class RawHistoryMessage(BaseModel):
    """A history message as delivered by the transport layer."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="allow")

    id: str
    role: MessageRole
    created_at: str = Field(alias="createdAt")
    payload: RawPayload
