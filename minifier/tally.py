"""Per-kind occurrence counting and alias map construction.

A ``FrequencyTally`` is threaded through pass 1 as an accumulator.  Values
keep their first-seen order, which is the documented tie-break when two
values have the same count.
"""

from __future__ import annotations

from minifier.names import allocate

# kind -> original value -> alias, inner dicts iterate in rank order.
AliasMap = dict[str, dict[str, str]]


class FrequencyTally:
    """Occurrence counts keyed by attribute kind, then by canonical value."""

    def __init__(self) -> None:
        self._counts: dict[str, dict[str, int]] = {}

    def add(self, kind: str, value: str, count: int = 1) -> None:
        """Record *count* occurrences of *value* under *kind*."""
        if count < 1:
            raise ValueError(f"count must be positive, got {count}")
        values = self._counts.setdefault(kind, {})
        values[value] = values.get(value, 0) + count

    def merge(self, other: FrequencyTally) -> None:
        """Add every count of *other* into this tally.

        Values already present keep their position; new values are appended
        in *other*'s first-seen order.
        """
        for kind, values in other._counts.items():
            for value, count in values.items():
                self.add(kind, value, count)

    def kinds(self) -> list[str]:
        return list(self._counts)

    def counts(self, kind: str) -> dict[str, int]:
        return dict(self._counts.get(kind, {}))

    def ranked(self, kind: str) -> list[str]:
        """Values of *kind* by descending count, ties in first-seen order."""
        values = self._counts.get(kind, {})
        # sorted() is stable, so equal counts keep insertion order.
        return sorted(values, key=lambda v: -values[v])

    def as_dict(self) -> dict[str, dict[str, int]]:
        return {kind: dict(values) for kind, values in self._counts.items()}

    def __len__(self) -> int:
        return sum(len(values) for values in self._counts.values())


def build_alias_map(tally: FrequencyTally) -> AliasMap:
    """Allocate aliases independently for every kind in *tally*."""
    return {kind: allocate(tally.ranked(kind)) for kind in tally.kinds()}
