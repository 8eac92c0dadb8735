"""Short alias allocation.

Aliases are the canonical enumeration of strings ordered by length, then
lexicographically in alphabet order, restricted so that every alias is a
valid CSS identifier without escaping:

    first character:  a-z _          (27 symbols)
    later characters: a-z _ 0-9 -    (38 symbols)

Rank 0 is ``a``, rank 26 is ``_``, rank 27 is ``aa``, rank 1053 is ``aaa``.
"""

from __future__ import annotations

from collections.abc import Iterable

FIRST_CHARS = "abcdefghijklmnopqrstuvwxyz_"
REST_CHARS = FIRST_CHARS + "0123456789-"


def alias_for_rank(rank: int) -> str:
    """Return the alias for a zero-based frequency rank."""
    if rank < 0:
        raise ValueError(f"rank must be non-negative, got {rank}")

    # Skip over every complete block of shorter aliases.
    length = 1
    block = len(FIRST_CHARS)
    while rank >= block:
        rank -= block
        length += 1
        block = len(FIRST_CHARS) * len(REST_CHARS) ** (length - 1)

    tail: list[str] = []
    for _ in range(length - 1):
        rank, digit = divmod(rank, len(REST_CHARS))
        tail.append(REST_CHARS[digit])
    return FIRST_CHARS[rank] + "".join(reversed(tail))


def allocate(ranked_values: Iterable[str]) -> dict[str, str]:
    """Map each value to the alias of its position in *ranked_values*.

    The returned dict iterates in rank order.
    """
    return {value: alias_for_rank(i) for i, value in enumerate(ranked_values)}
