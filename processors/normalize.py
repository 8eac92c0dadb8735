"""CSS identifier unescaping.

Selectors may escape any character with a backslash (``.sm\\:p-4``,
``.w-1\\/2``) or with a hex code point (``.\\32xl\\:p-4`` for ``2xl:p-4``).
HTML attribute values never carry those escapes, so every CSS-sourced value
goes through ``normalize()`` before it is counted or looked up.  HTML-sourced
values are used as-is.
"""

from __future__ import annotations

import re

# Hex escape (1-6 digits, one optional trailing whitespace) or a single
# escaped character.  A lone trailing backslash does not match.
_ESCAPE_RE = re.compile(r"\\(?:([0-9a-fA-F]{1,6})(?:\r\n|[ \t\r\n\f])?|(.))", re.DOTALL)

_MAX_CODE_POINT = 0x10FFFF


def _unescape(match: re.Match[str]) -> str:
    hex_digits, char = match.group(1), match.group(2)
    if hex_digits is None:
        return char
    code_point = int(hex_digits, 16)
    if code_point == 0 or code_point > _MAX_CODE_POINT or 0xD800 <= code_point <= 0xDFFF:
        return "\ufffd"
    return chr(code_point)


def normalize(raw: str) -> str:
    """Remove one level of CSS backslash escaping from *raw*.

    Scans left to right, non-recursively: ``\\:`` becomes ``:``, ``\\\\``
    becomes a single backslash, ``\\31 0`` becomes ``10``.
    """
    if "\\" not in raw:
        return raw
    return _ESCAPE_RE.sub(_unescape, raw)
