"""Descending rankings over category counts.

Entries are ordered by count, highest first. Equal counts are ordered by
label so a ranking does not depend on the order in which the event source
happened to deliver documents.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses


@dataclasses.dataclass(frozen=True, slots=True)
class RankedEntry:
    """One row of a ranking; ``rank`` is 1-based."""

    rank: int
    label: str
    count: int


def _sort_key(item: tuple[str, int]) -> tuple[int, str]:
    label, count = item
    return (-count, label)


def full_ranking(counts: cabc.Mapping[str, int]) -> tuple[RankedEntry, ...]:
    """Rank every entry of ``counts`` with no truncation."""
    ordered = sorted(counts.items(), key=_sort_key)
    return tuple(
        RankedEntry(rank=position, label=label, count=count)
        for position, (label, count) in enumerate(ordered, start=1)
    )


def top_n(counts: cabc.Mapping[str, int], n: int) -> tuple[RankedEntry, ...]:
    """Return at most ``n`` leading entries of :func:`full_ranking`.

    Raises
    ------
    ValueError
        If ``n`` is negative.

    """
    if n < 0:
        msg = f"n must be non-negative, got: {n}"
        raise ValueError(msg)
    return full_ranking(counts)[:n]
