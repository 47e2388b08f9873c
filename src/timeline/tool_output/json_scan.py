"""
Best-effort extraction of string fields from malformed JSON.

Legacy tool results were sometimes truncated mid-document or wrapped in an
extra layer of string encoding, so ``json.loads`` rejects them even though
the interesting fields are intact. The scanner walks the raw text looking for
``"field": "value"`` and decodes the value by hand, ignoring whatever
surrounds it.

Pure string functions, no dependency on the structural JSON path.
"""

from __future__ import annotations

_SIMPLE_ESCAPES = {
    "\\": "\\",
    '"': '"',
    "/": "/",
    "b": "\b",
    "f": "\f",
    "n": "\n",
    "r": "\r",
    "t": "\t",
}

_HEX_DIGITS = frozenset("0123456789abcdefABCDEF")


def extract_json_string_field(text: str, field_name: str) -> str | None:
    """
    Find ``"field_name": "..."`` in text and return the decoded value.

    Occurrences that are not followed by a colon and an opening quote (for
    example the name appearing inside another value) are skipped. Returns
    None when no complete string value is found, including when the value's
    closing quote was truncated away.

    Example:
        >>> extract_json_string_field('{"command": "ls", "output": "a\\\\nb', "command")
        'ls'
    """
    token = f'"{field_name}"'
    search_from = 0

    while True:
        field_index = text.find(token, search_from)
        if field_index == -1:
            return None
        search_from = field_index + len(token)

        cursor = _skip_whitespace(text, search_from)
        if cursor >= len(text) or text[cursor] != ":":
            continue

        cursor = _skip_whitespace(text, cursor + 1)
        if cursor >= len(text) or text[cursor] != '"':
            continue

        value, _ = _read_string_body(text, cursor + 1)
        return value


def unwrap_json_string_literal(text: str) -> str | None:
    """
    Decode text that is itself a JSON string literal, even if truncated.

    Returns the inner text, or None when text does not start with a quote.
    A missing closing quote is tolerated: everything decoded up to the end of
    the input is returned.
    """
    stripped = text.strip()
    if not stripped.startswith('"'):
        return None

    value, _ = _read_string_body(stripped, 1, lenient=True)
    return value


def _skip_whitespace(text: str, cursor: int) -> int:
    while cursor < len(text) and text[cursor].isspace():
        cursor += 1
    return cursor


def _read_string_body(
    text: str, cursor: int, lenient: bool = False
) -> tuple[str | None, int]:
    """
    Decode a JSON string body starting just after its opening quote.

    Returns (value, index after the closing quote). Without a closing quote
    the value is None, unless lenient, in which case the partial value is
    returned.
    """
    out: list[str] = []
    length = len(text)

    while cursor < length:
        char = text[cursor]

        if char == '"':
            return "".join(out), cursor + 1

        if char != "\\":
            out.append(char)
            cursor += 1
            continue

        if cursor + 1 >= length:
            break

        escaped = text[cursor + 1]
        if escaped == "u":
            code = _read_hex4(text, cursor + 2)
            if code is not None:
                cursor += 6
                # Join a surrogate pair into one character
                if 0xD800 <= code <= 0xDBFF and text.startswith("\\u", cursor):
                    low = _read_hex4(text, cursor + 2)
                    if low is not None and 0xDC00 <= low <= 0xDFFF:
                        code = 0x10000 + ((code - 0xD800) << 10) + (low - 0xDC00)
                        cursor += 6
                out.append(chr(code))
                continue

        out.append(_SIMPLE_ESCAPES.get(escaped, escaped))
        cursor += 2

    if lenient:
        return "".join(out), length
    return None, length


def _read_hex4(text: str, start: int) -> int | None:
    digits = text[start : start + 4]
    if len(digits) != 4 or not all(d in _HEX_DIGITS for d in digits):
        return None
    return int(digits, 16)
