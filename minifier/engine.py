"""Two-pass minification engine.

Orchestrates:
1. Pass 1 -- count identifier occurrences across every source unit
2. Alias allocation -- one frequency-ranked alias map per attribute kind
3. Pass 2 -- rewrite every source unit with the finished alias map

Pass 2 never starts before the alias map is complete.  Both passes may run on
a thread pool; pass 1 then counts each file into its own tally and merges the
partial tallies in corpus order, which gives the same result as a sequential
fold.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Mapping, Sequence
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import TypeVar

from minifier.config import MinifyConfig
from minifier.tally import AliasMap, FrequencyTally, build_alias_map
from processors import Dialect, dialect_for_path

logger = logging.getLogger("minifier")

T = TypeVar("T")
R = TypeVar("R")


@dataclass
class SourceUnit:
    """One file's text together with the dialect that processes it."""

    path: str
    text: str
    dialect: Dialect


@dataclass
class MinifyResult:
    """Outcome of a full run."""

    alias_map: AliasMap
    outputs: dict[str, str] = field(default_factory=dict)
    skipped: list[str] = field(default_factory=list)


def _map_ordered(
    fn: Callable[[T], R], items: Sequence[T], workers: int
) -> list[R]:
    """Apply *fn* to every item, in a thread pool when ``workers > 1``.

    Results come back in input order either way.
    """
    if workers <= 1 or len(items) <= 1:
        return [fn(item) for item in items]
    with ThreadPoolExecutor(max_workers=workers) as pool:
        return list(pool.map(fn, items))


def count_source(
    tally: FrequencyTally, source: SourceUnit, attributes: Collection[str]
) -> None:
    """Pass 1 for a single file."""
    logger.debug(
        "counting", extra={"path": source.path, "dialect": source.dialect.value}
    )
    source.dialect.count_attributes(tally, source.text, attributes)


def count_sources(
    sources: Sequence[SourceUnit],
    attributes: Collection[str],
    workers: int = 1,
) -> FrequencyTally:
    """Pass 1 over the whole corpus."""
    if workers <= 1:
        tally = FrequencyTally()
        for source in sources:
            count_source(tally, source, attributes)
        return tally

    def count_one(source: SourceUnit) -> FrequencyTally:
        local = FrequencyTally()
        count_source(local, source, attributes)
        return local

    tally = FrequencyTally()
    for partial in _map_ordered(count_one, sources, workers):
        tally.merge(partial)
    return tally


def rewrite_source(alias_map: AliasMap, source: SourceUnit) -> str:
    """Pass 2 for a single file; returns the complete rewritten text."""
    logger.debug(
        "rewriting", extra={"path": source.path, "dialect": source.dialect.value}
    )
    return source.dialect.apply_attr_map(alias_map, source.text)


def rewrite_sources(
    sources: Sequence[SourceUnit], alias_map: AliasMap, workers: int = 1
) -> dict[str, str]:
    """Pass 2 over the whole corpus, keyed by source path."""
    texts = _map_ordered(
        lambda source: rewrite_source(alias_map, source), sources, workers
    )
    return {source.path: text for source, text in zip(sources, texts)}


def run(sources: Sequence[SourceUnit], config: MinifyConfig) -> MinifyResult:
    """Run both passes over already-loaded source units."""
    tally = count_sources(sources, config.attributes, config.workers)
    alias_map = build_alias_map(tally)
    logger.info(
        "alias map built: %d values across %d kinds",
        len(tally),
        len(alias_map),
    )

    outputs = rewrite_sources(sources, alias_map, config.workers)
    return MinifyResult(alias_map=alias_map, outputs=outputs)


def build_sources(files: Mapping[str, str]) -> tuple[list[SourceUnit], list[str]]:
    """Pair each file with its dialect; files without one are returned as skipped."""
    sources: list[SourceUnit] = []
    skipped: list[str] = []
    for path, text in files.items():
        dialect = dialect_for_path(path)
        if dialect is None:
            skipped.append(path)
        else:
            sources.append(SourceUnit(path=path, text=text, dialect=dialect))
    return sources, skipped


def minify_sources(
    files: Mapping[str, str], config: MinifyConfig | None = None
) -> MinifyResult:
    """Minify an in-memory corpus of ``{path: text}``.

    Iteration order of *files* is the corpus order used for first-seen
    tie-breaks.
    """
    config = config or MinifyConfig()
    sources, skipped = build_sources(files)
    result = run(sources, config)
    result.skipped = skipped
    return result
