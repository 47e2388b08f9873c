"""Shared history payload fixtures.

Canonical, legacy and mixed-sequence raw messages reused across the
normalizer, hydrator and projection test suites. Payloads mirror what each
backend generation actually stored.
"""

import json
from typing import Any, Literal, Optional

from timeline.contracts import (
    RawHistoryMessage,
    RawSerializedPayload,
    RawStructuredPayload,
    StructuredValue,
)
from timeline.hydration import NormalizationContext


# --- Primitive helpers ---


def structured_payload(
    text: str, blocks: Optional[list[Any]] = None
) -> RawStructuredPayload:
    """Structured payload; blocks use wire (camelCase) keys."""
    return RawStructuredPayload(value=StructuredValue(text=text, blocks=blocks))


def serialized_payload(
    value: str,
    encoding: Literal["json", "json-escaped", "plain-text"] = "json",
) -> RawSerializedPayload:
    return RawSerializedPayload(value=value, encoding=encoding)


def make_raw_message(
    payload: Any = None,
    id: str = "msg-1",
    role: Literal["user", "assistant", "system"] = "assistant",
    created_at: str = "2026-01-15T10:00:00.000Z",
) -> RawHistoryMessage:
    """Build a raw history message the way the transport layer would."""
    if payload is None:
        payload = structured_payload("Hello, world!")
    return RawHistoryMessage.model_validate(
        {
            "id": id,
            "role": role,
            "createdAt": created_at,
            "payload": payload.model_dump(),
        }
    )


def make_context(
    fallback_index: int = 0, seen: Optional[set[str]] = None
) -> NormalizationContext:
    return NormalizationContext(
        fallback_index=fallback_index, seen_message_ids=frozenset(seen or ())
    )


def tool_use(tool_call_id: str, name: str = "bash", **args: Any) -> dict[str, Any]:
    return {"type": "tool-use", "toolCallId": tool_call_id, "name": name, "args": args}


def tool_result(tool_call_id: str, output: str, **extra: Any) -> dict[str, Any]:
    return {"type": "tool-result", "toolCallId": tool_call_id, "output": output, **extra}


# --- Canonical structured payloads (current backend format) ---

CANONICAL_USER_TEXT = make_raw_message(
    id="canonical-user-1",
    role="user",
    created_at="2026-02-13T10:00:00.000Z",
    payload=structured_payload("What is the weather today?"),
)

CANONICAL_ASSISTANT_TEXT = make_raw_message(
    id="canonical-asst-1",
    created_at="2026-02-13T10:00:01.000Z",
    payload=structured_payload("The weather is sunny and 72F."),
)

CANONICAL_TOOL_MESSAGE = make_raw_message(
    id="canonical-tool-1",
    created_at="2026-02-13T10:00:02.000Z",
    payload=structured_payload(
        "Let me check that for you.",
        [
            {"type": "text", "text": "Let me check that for you."},
            tool_use("tc-weather-1", name="get_weather", location="San Francisco"),
            tool_result(
                "tc-weather-1", "Temperature: 72F\nCondition: Sunny\nHumidity: 45%"
            ),
        ],
    ),
)

CANONICAL_TOOL_ERROR = make_raw_message(
    id="canonical-tool-err-1",
    created_at="2026-02-13T10:00:03.000Z",
    payload=structured_payload(
        "",
        [
            tool_use("tc-fail-1", command="rm -rf /protected"),
            tool_result("tc-fail-1", "Permission denied: /protected", isError=True),
        ],
    ),
)

CANONICAL_JSON_SERIALIZED = make_raw_message(
    id="canonical-json-1",
    created_at="2026-02-13T10:00:04.000Z",
    payload=serialized_payload(
        json.dumps(
            {
                "text": "Here are the results",
                "blocks": [
                    {"type": "text", "text": "Here are the results"},
                    tool_use("tc-ls-1", command="ls -la"),
                    tool_result("tc-ls-1", "total 42\nREADME.md"),
                ],
            }
        )
    ),
)


# --- Legacy serialized payloads (older backend formats) ---

LEGACY_ESCAPED_TEXT = make_raw_message(
    id="legacy-escaped-1",
    created_at="2026-02-13T10:01:00.000Z",
    payload=serialized_payload(
        "Here is the output:\\nLine 1\\nLine 2\\tindented\\nLine 3", "json-escaped"
    ),
)

LEGACY_ESCAPED_QUOTES = make_raw_message(
    id="legacy-escaped-2",
    created_at="2026-02-13T10:01:01.000Z",
    payload=serialized_payload(
        'He said \\"hello\\" and the path was C:\\\\Users\\\\test', "json-escaped"
    ),
)

LEGACY_DOUBLE_ENCODED_STRING = make_raw_message(
    id="legacy-double-str-1",
    created_at="2026-02-13T10:01:02.000Z",
    payload=serialized_payload(json.dumps("Hello\nWorld\ttab")),
)

LEGACY_DOUBLE_ENCODED_STRUCTURED = make_raw_message(
    id="legacy-double-struct-1",
    created_at="2026-02-13T10:01:03.000Z",
    payload=serialized_payload(
        json.dumps(
            json.dumps(
                {
                    "text": "Legacy structured content",
                    "blocks": [{"type": "text", "text": "Legacy structured content"}],
                }
            )
        )
    ),
)

LEGACY_PLAIN_TEXT = make_raw_message(
    id="legacy-plain-1",
    role="user",
    created_at="2026-02-13T10:01:04.000Z",
    payload=serialized_payload("Just a plain text message", "plain-text"),
)


# --- Mixed sequences (realistic conversation flows) ---

MIXED_SEQUENCE_CANONICAL = [
    make_raw_message(
        id="mix-user-1",
        role="user",
        created_at="2026-02-13T10:00:00.000Z",
        payload=structured_payload("List the files in the current directory"),
    ),
    make_raw_message(
        id="mix-asst-1",
        created_at="2026-02-13T10:00:01.000Z",
        payload=structured_payload(
            "I'll check that for you.",
            [
                {"type": "text", "text": "I'll check that for you."},
                tool_use("tc-ls-mix", command="ls -la"),
                tool_result("tc-ls-mix", "package.json\nsrc/\ntests/\nREADME.md"),
            ],
        ),
    ),
    make_raw_message(
        id="mix-user-2",
        role="user",
        created_at="2026-02-13T10:00:05.000Z",
        payload=structured_payload("Now show me the README"),
    ),
    make_raw_message(
        id="mix-asst-2",
        created_at="2026-02-13T10:00:06.000Z",
        payload=structured_payload(
            "Here is the README content.",
            [
                {"type": "text", "text": "Here is the README content."},
                tool_use("tc-cat-mix", command="cat README.md"),
                tool_result("tc-cat-mix", "# My Project\n\nA sample project."),
            ],
        ),
    ),
]

# A session spanning backend format changes
MIXED_SEQUENCE_LEGACY = [
    make_raw_message(
        id="mixleg-user-1",
        role="user",
        created_at="2026-02-13T10:02:00.000Z",
        payload=serialized_payload("Show me the logs", "plain-text"),
    ),
    make_raw_message(
        id="mixleg-asst-1",
        created_at="2026-02-13T10:02:01.000Z",
        payload=serialized_payload(
            "Here are the logs:\\n[INFO] Server started\\n[ERROR] Connection timeout",
            "json-escaped",
        ),
    ),
    make_raw_message(
        id="mixleg-user-2",
        role="user",
        created_at="2026-02-13T10:02:05.000Z",
        payload=structured_payload("Can you fix the timeout?"),
    ),
    make_raw_message(
        id="mixleg-asst-2",
        created_at="2026-02-13T10:02:06.000Z",
        payload=structured_payload(
            "I'll investigate the connection issue.",
            [
                {"type": "text", "text": "I'll investigate the connection issue."},
                tool_use("tc-fix-1", command="grep timeout config.yml"),
                tool_result("tc-fix-1", "connection_timeout: 5000"),
            ],
        ),
    ),
]
