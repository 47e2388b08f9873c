"""Decoding of escaped control sequences found in serialized history payloads."""

from __future__ import annotations

import re

_ESCAPES = {
    "\\n": "\n",
    "\\t": "\t",
    "\\r": "\r",
    "\\\\": "\\",
    '\\"': '"',
}

_ESCAPE_PATTERN = re.compile(r'\\[ntr\\"]')


def decode_escaped_text(text: str) -> str:
    """
    Replace the literal sequences ``\\n \\t \\r \\\\ \\"`` with the characters
    they stand for.

    Only these five tokens are decoded; anything else behind a backslash
    (``\\x41``, ``\\u0041``) is left as written so already-decoded text is not
    mangled.

    Example:
        >>> decode_escaped_text("a\\\\nb")
        'a\\nb'
    """
    if "\\" not in text:
        return text
    return _ESCAPE_PATTERN.sub(lambda match: _ESCAPES[match.group(0)], text)
