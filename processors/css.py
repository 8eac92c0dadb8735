"""Stylesheet processor.

The stylesheet is scanned at brace level to find the selector prelude of
every style rule; only those spans are counted and rewritten, everything
else (declarations, comments, whitespace) is copied through untouched.

Rules inside grouping at-rules (``@media``, ``@supports``, ``@layer``,
``@container`` ...) and nested style rules are reached the same way.  Blocks
of any other at-rule (``@font-face``, ``@keyframes``, ``@page`` ...) hold no
class or id selectors and are skipped whole.
"""

from __future__ import annotations

import re
from collections.abc import Collection, Iterator
from typing import TYPE_CHECKING

from processors.selectors import count_selector, rewrite_selector

if TYPE_CHECKING:
    from minifier.tally import AliasMap, FrequencyTally

GROUPING_AT_RULES = {
    "@media",
    "@supports",
    "@layer",
    "@container",
    "@document",
    "@-moz-document",
    "@scope",
    "@starting-style",
}

_COMMENT_RE = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_STRING_RE = re.compile(r""""(?:[^"\\\n]|\\.)*"?|'(?:[^'\\\n]|\\.)*'?""", re.DOTALL)
_AT_KEYWORD_RE = re.compile(r"\s*(@[-\w]+)")


def _skip_opaque(text: str, i: int) -> int | None:
    """Return the index past a comment or string starting at *i*, else None."""
    if text.startswith("/*", i):
        return _COMMENT_RE.match(text, i).end()
    if text[i] in ("'", '"'):
        return _STRING_RE.match(text, i).end()
    return None


def _block_end(text: str, i: int) -> int:
    """Index just past the ``}`` closing the block opened at *i*."""
    depth = 0
    n = len(text)
    while i < n:
        j = _skip_opaque(text, i)
        if j is not None:
            i = j
            continue
        if text[i] == "{":
            depth += 1
        elif text[i] == "}":
            depth -= 1
            if depth == 0:
                return i + 1
        i += 1
    return n


def _paren_spans(text: str, start: int, end: int) -> Iterator[tuple[int, int]]:
    """Yield the inner spans of top-level ``(...)`` groups in ``text[start:end]``."""
    depth = 0
    open_at = start
    i = start
    while i < end:
        j = _skip_opaque(text, i)
        if j is not None:
            i = j
            continue
        if text[i] == "(":
            if depth == 0:
                open_at = i + 1
            depth += 1
        elif text[i] == ")" and depth:
            depth -= 1
            if depth == 0:
                yield open_at, i
        i += 1


def style_preludes(text: str) -> Iterator[tuple[int, int]]:
    """Yield ``(start, end)`` spans of every style-rule selector prelude.

    For ``@scope`` the spans are the parenthesized scope root and limit.
    """
    start = 0
    i = 0
    n = len(text)
    while i < n:
        j = _skip_opaque(text, i)
        if j is not None:
            i = j
            continue

        ch = text[i]
        if ch == "{":
            prelude = _COMMENT_RE.sub("", text[start:i])
            keyword = _AT_KEYWORD_RE.match(prelude)
            if keyword and keyword.group(1).lower() not in GROUPING_AT_RULES:
                i = start = _block_end(text, i)
                continue
            if keyword and keyword.group(1).lower() == "@scope":
                # scope root and scope limit are selector lists
                yield from _paren_spans(text, start, i)
            elif not keyword and prelude.strip():
                yield start, i
            start = i + 1
        elif ch in (";", "}"):
            start = i + 1
        i += 1


def count_attributes(
    tally: FrequencyTally, text: str, attributes: Collection[str]
) -> None:
    """Count class, id and attribute-selector identifiers in a stylesheet."""
    for start, end in style_preludes(text):
        count_selector(tally, text[start:end], attributes)


def apply_attr_map(alias_map: AliasMap, text: str) -> str:
    """Rewrite every mapped selector in a stylesheet."""
    out: list[str] = []
    last = 0
    for start, end in style_preludes(text):
        out.append(text[last:start])
        out.append(rewrite_selector(alias_map, text[start:end]))
        last = end
    out.append(text[last:])
    return "".join(out)
