"""Locate and decode the escaped JSON array embedded in a conference web page."""

from __future__ import annotations

import logging
import re
from itertools import islice

__all__ = [
    "ExtractionError",
    "unescape_unicode",
    "find_embedded_array",
    "extract_embedded_json",
]

log = logging.getLogger(__name__)

# The page ships its data as a JSON array whose quotes are backslash-escaped.
ARRAY_MARKER = '[{\\"id\\":\\"'

_SIMPLE_ESCAPES = {
    "n": "\n",
    "r": "\r",
    "t": "\t",
    '"': '"',
    "\\": "\\",
}

_HEX4 = re.compile(r"\+?[0-9A-Fa-f]+")


class ExtractionError(ValueError):
    """Raised when no embedded JSON array can be found in a page."""


def _code_point(hex_chars: str) -> int | None:
    """Return the character code for a four-character hex escape, if valid."""
    if len(hex_chars.encode("utf-8")) != 4 or not _HEX4.fullmatch(hex_chars):
        return None
    code = int(hex_chars, 16)
    if 0xD800 <= code <= 0xDFFF:
        return None
    return code


def unescape_unicode(text: str) -> str:
    """Decode ``\\uXXXX``, ``\\n``, ``\\r``, ``\\t``, ``\\"`` and ``\\\\`` escapes.

    Escapes that cannot be decoded are kept as they appear in the input.
    """
    out: list[str] = []
    chars = iter(text)
    for ch in chars:
        if ch != "\\":
            out.append(ch)
            continue
        following = next(chars, None)
        if following is None:
            out.append(ch)
        elif following == "u":
            hex_chars = "".join(islice(chars, 4))
            code = _code_point(hex_chars)
            if code is not None:
                out.append(chr(code))
            else:
                out.append("\\u" + hex_chars)
        elif following in _SIMPLE_ESCAPES:
            out.append(_SIMPLE_ESCAPES[following])
        else:
            out.append("\\" + following)
    return "".join(out)


def find_embedded_array(html: str) -> str | None:
    """Return the raw, still-escaped JSON array embedded in ``html``.

    The scan starts at the first ``[{\\"id\\":\\"`` and ends at the bracket
    that balances it. Returns ``None`` when there is no such array.
    """
    start = html.find(ARRAY_MARKER)
    if start < 0:
        return None

    depth = 0
    in_string = False
    escape_next = False
    for offset, ch in enumerate(html[start:]):
        if escape_next:
            escape_next = False
            continue
        if ch == "\\":
            escape_next = True
        elif ch == '"':
            in_string = not in_string
        elif ch == "[" and not in_string:
            depth += 1
        elif ch == "]" and not in_string:
            depth -= 1
            if depth == 0:
                return html[start : start + offset + 1]
    return None


def extract_embedded_json(html: str) -> str:
    """Return the embedded JSON array of ``html`` as plain JSON text."""
    raw = find_embedded_array(html)
    if raw is None:
        raise ExtractionError("Could not find embedded JSON array in the HTML content")
    json_text = unescape_unicode(raw.replace('\\"', '"'))
    log.debug("Extracted %d characters of embedded JSON", len(json_text))
    return json_text