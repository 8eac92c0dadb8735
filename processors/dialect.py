"""Closed set of source dialects, selected once per file by extension."""

from __future__ import annotations

from collections.abc import Collection
from enum import Enum
from pathlib import PurePath
from typing import TYPE_CHECKING

from processors import css, html

if TYPE_CHECKING:
    from minifier.tally import AliasMap, FrequencyTally


class Dialect(str, Enum):
    """Supported source kinds, each exposing the two pass operations."""

    HTML = "html"
    CSS = "css"

    def count_attributes(
        self, tally: FrequencyTally, text: str, attributes: Collection[str]
    ) -> None:
        """Pass 1: add every recognized identifier occurrence to *tally*."""
        _MODULES[self].count_attributes(tally, text, attributes)

    def apply_attr_map(self, alias_map: AliasMap, text: str) -> str:
        """Pass 2: return *text* rewritten with *alias_map*."""
        return _MODULES[self].apply_attr_map(alias_map, text)


_MODULES = {
    Dialect.HTML: html,
    Dialect.CSS: css,
}

EXTENSIONS: dict[str, Dialect] = {
    ".html": Dialect.HTML,
    ".htm": Dialect.HTML,
    ".css": Dialect.CSS,
}


def dialect_for_path(path: str | PurePath) -> Dialect | None:
    """Return the dialect for a file name, or None when it is not processed."""
    return EXTENSIONS.get(PurePath(path).suffix.lower())
