"""Selector-level counting and rewriting.

A selector prelude is scanned into a flat token stream: class selectors, id
selectors, attribute selectors and everything else (combinators, comments,
strings) as opaque text.  Functional pseudo-classes such as
``:where(.a, .b)`` or ``:not([id^="x"])`` need no special handling because
the tokens they contain are found by the same flat scan.

Matcher semantics on rewrite:

    =  ~=  (exact family)    normalized literal looked up directly
    ^= $= *= (substring)     first original value in alias-map order that
                             satisfies the condition; matcher becomes ``=``
    |=  and anything else    left unchanged with a warning
"""

from __future__ import annotations

import logging
import re
from collections.abc import Collection
from dataclasses import dataclass
from typing import TYPE_CHECKING

from processors.normalize import normalize

if TYPE_CHECKING:
    from minifier.tally import AliasMap, FrequencyTally

logger = logging.getLogger("minifier")

EXACT_MATCHERS = ("=", "~=")
SUBSTRING_MATCHERS = ("^=", "$=", "*=")

# ---------------------------------------------------------------------------
# Grammar (CSS Syntax Level 3 identifiers, escapes included)
# ---------------------------------------------------------------------------

_ESCAPE = r"\\(?:[0-9a-fA-F]{1,6}(?:\r\n|[ \t\r\n\f])?|[^\r\n\f0-9a-fA-F])"
_NMSTART = rf"(?:[A-Za-z_]|[^\x00-\x7F]|{_ESCAPE})"
_NMCHAR = rf"(?:[A-Za-z0-9_-]|[^\x00-\x7F]|{_ESCAPE})"
_IDENT = rf"(?:--|-?{_NMSTART}){_NMCHAR}*"

_IDENT_RE = re.compile(_IDENT)
_NAME_RE = re.compile(rf"{_NMCHAR}+")
_FULL_IDENT_RE = re.compile(rf"{_IDENT}\Z")

_ATTRIBUTE_RE = re.compile(
    rf"""
    \[\s*
    (?:(?:[A-Za-z_][A-Za-z0-9_-]*|\*)?\|(?!=))?       # optional namespace prefix
    (?P<name>{_IDENT})
    \s*
    (?:
        (?P<matcher>[~|^$*]?=)
        \s*
        (?P<value>"(?:[^"\\\n]|\\.)*"|'(?:[^'\\\n]|\\.)*'|[^\s\]]+)
        \s*
        (?:(?P<flags>[iIsS])\s*)?
    )?
    \]
    """,
    re.VERBOSE | re.DOTALL,
)

_STRING_RE = re.compile(r""""(?:[^"\\]|\\.)*"?|'(?:[^'\\]|\\.)*'?""", re.DOTALL)


# ---------------------------------------------------------------------------
# Tokens
# ---------------------------------------------------------------------------


@dataclass
class NameSelector:
    """A ``.class`` or ``#id`` simple selector."""

    kind: str
    prefix: str
    raw_name: str

    @property
    def name(self) -> str:
        return normalize(self.raw_name)

    def render(self, name: str | None = None) -> str:
        return self.prefix + (self.raw_name if name is None else name)


@dataclass
class AttributeSelector:
    """A bracketed attribute selector, kept as its regex match for re-emission."""

    match: re.Match[str]

    @property
    def raw(self) -> str:
        return self.match.group(0)

    @property
    def attribute(self) -> str:
        return normalize(self.match.group("name")).lower()

    @property
    def matcher(self) -> str | None:
        return self.match.group("matcher")

    @property
    def quote(self) -> str:
        """The quote character of a string literal, ``""`` for identifiers."""
        value = self.match.group("value") or ""
        return value[0] if value[:1] in ("'", '"') else ""

    def literal(self) -> str | None:
        """Return the normalized literal value, or None when unsupported.

        Quoted strings and bare identifiers are supported.  Anything else is
        logged and skipped.
        """
        value = self.match.group("value")
        if value is None:
            return None
        if self.quote:
            if len(value) < 2 or value[-1] != self.quote:
                _warn_value_syntax(self)
                return None
            return normalize(value[1:-1])
        if _FULL_IDENT_RE.match(value):
            return normalize(value)
        _warn_value_syntax(self)
        return None

    def render(self, value: str, matcher: str | None = None) -> str:
        """Re-emit the selector with a new literal, keeping quoting and spacing."""
        m = self.match
        text = m.string
        literal = f"{self.quote}{value}{self.quote}"
        return (
            text[m.start() : m.start("matcher")]
            + (matcher or m.group("matcher"))
            + text[m.end("matcher") : m.start("value")]
            + literal
            + text[m.end("value") : m.end()]
        )


Token = str | NameSelector | AttributeSelector


def _warn_value_syntax(node: AttributeSelector) -> None:
    logger.warning(
        "Unexpected value type in attribute selector: %s",
        node.raw,
        extra={"kind": node.attribute, "value": node.match.group("value")},
    )


# ---------------------------------------------------------------------------
# Scanner
# ---------------------------------------------------------------------------


def scan_selector(text: str) -> list[Token]:
    """Split selector text into name, attribute and plain-text tokens.

    Concatenating the ``render()`` output of each token (and the plain
    strings) reproduces *text* exactly.
    """
    tokens: list[Token] = []
    plain: list[str] = []

    def flush() -> None:
        if plain:
            tokens.append("".join(plain))
            plain.clear()

    i = 0
    while i < len(text):
        ch = text[i]

        if text.startswith("/*", i):
            end = text.find("*/", i + 2)
            end = len(text) if end == -1 else end + 2
            plain.append(text[i:end])
            i = end
            continue

        if ch in ("'", '"'):
            m = _STRING_RE.match(text, i)
            plain.append(m.group(0))
            i = m.end()
            continue

        if ch == "\\":
            plain.append(text[i : i + 2])
            i += 2
            continue

        if ch in (".", "#"):
            m = (_IDENT_RE if ch == "." else _NAME_RE).match(text, i + 1)
            if m:
                flush()
                kind = "class" if ch == "." else "id"
                tokens.append(NameSelector(kind, ch, m.group(0)))
                i = m.end()
                continue

        if ch == "[":
            m = _ATTRIBUTE_RE.match(text, i)
            if m:
                flush()
                tokens.append(AttributeSelector(m))
                i = m.end()
                continue

        plain.append(ch)
        i += 1

    flush()
    return tokens


# ---------------------------------------------------------------------------
# Pass 1
# ---------------------------------------------------------------------------


def count_selector(
    tally: FrequencyTally, text: str, attributes: Collection[str]
) -> None:
    """Add every recognized identifier in *text* to *tally*."""
    for token in scan_selector(text):
        if isinstance(token, NameSelector):
            if token.kind in attributes:
                tally.add(token.kind, token.name)
        elif isinstance(token, AttributeSelector):
            if token.attribute not in attributes:
                continue
            value = token.literal()
            if value:
                tally.add(token.attribute, value)


# ---------------------------------------------------------------------------
# Pass 2
# ---------------------------------------------------------------------------


def _substring_match(matcher: str, original: str, literal: str) -> bool:
    if matcher == "*=":
        return literal in original
    if matcher == "^=":
        return original.startswith(literal)
    return original.endswith(literal)


def _rewrite_attribute(alias_map: AliasMap, token: AttributeSelector) -> str:
    aliases = alias_map.get(token.attribute)
    if not aliases or token.matcher is None:
        return token.raw

    matcher = token.matcher
    if matcher not in EXACT_MATCHERS and matcher not in SUBSTRING_MATCHERS:
        logger.warning(
            "Unexpected matcher type: %s",
            matcher,
            extra={"kind": token.attribute, "matcher": matcher},
        )
        return token.raw

    literal = token.literal()
    if not literal:
        return token.raw

    if matcher in EXACT_MATCHERS:
        alias = aliases.get(literal)
        return token.raw if alias is None else token.render(alias)

    # The aliased value no longer contains the literal, so the selector is
    # pinned to one full value and compared exactly.  The literal is itself
    # counted in pass 1; it only wins when no other value matches.
    own = None
    for original, alias in aliases.items():
        if original == literal:
            own = alias
        elif _substring_match(matcher, original, literal):
            return token.render(alias, matcher="=")
    if own is not None:
        return token.render(own, matcher="=")
    return token.raw


def rewrite_selector(alias_map: AliasMap, text: str) -> str:
    """Return *text* with every mapped identifier replaced by its alias."""
    out: list[str] = []
    for token in scan_selector(text):
        if isinstance(token, str):
            out.append(token)
        elif isinstance(token, NameSelector):
            alias = alias_map.get(token.kind, {}).get(token.name)
            out.append(token.render(alias))
        else:
            out.append(_rewrite_attribute(alias_map, token))
    return "".join(out)
