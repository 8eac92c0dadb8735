"""Markup processor built on BeautifulSoup (lxml backend).

Every configured attribute is treated as a whitespace-separated token list.
``<style>`` blocks are delegated to the CSS processor and written back as
stylesheet strings so their content is never entity-escaped.
"""

from __future__ import annotations

import re
from collections.abc import Collection
from typing import TYPE_CHECKING

from bs4 import BeautifulSoup
from bs4.element import Stylesheet

from processors import css

if TYPE_CHECKING:
    from minifier.tally import AliasMap, FrequencyTally

# ASCII whitespace as defined by the HTML standard.
_HTML_WS_RE = re.compile(r"[\t\n\f\r ]+")


def split_tokens(value: str) -> list[str]:
    """Split an attribute value on ASCII whitespace, dropping empty tokens."""
    return [token for token in _HTML_WS_RE.split(value) if token]


def _parse(text: str) -> BeautifulSoup:
    # Keep class (and every other attribute) as a plain string.
    return BeautifulSoup(text, "lxml", multi_valued_attributes=None)


def count_attributes(
    tally: FrequencyTally, text: str, attributes: Collection[str]
) -> None:
    """Count configured attribute tokens and the contents of ``<style>`` blocks."""
    soup = _parse(text)
    for tag in soup.find_all(True):
        if tag.name == "style":
            if tag.string:
                css.count_attributes(tally, str(tag.string), attributes)
            continue

        for name, value in tag.attrs.items():
            if name not in attributes or not isinstance(value, str):
                continue
            for token in split_tokens(value):
                tally.add(name, token)


def apply_attr_map(alias_map: AliasMap, text: str) -> str:
    """Replace mapped attribute tokens and rewrite embedded stylesheets."""
    soup = _parse(text)
    for tag in soup.find_all(True):
        if tag.name == "style":
            if tag.string:
                tag.string = Stylesheet(css.apply_attr_map(alias_map, str(tag.string)))
            continue

        for name, value in list(tag.attrs.items()):
            aliases = alias_map.get(name)
            if not aliases or not isinstance(value, str):
                continue
            tokens = split_tokens(value)
            if tokens:
                tag[name] = " ".join(aliases.get(token, token) for token in tokens)

    return soup.decode(formatter="minimal")
