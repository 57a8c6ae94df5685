"""Single-pass categorical counts over filtered events."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from hookboard.events.models import UNKNOWN_LABEL

if typ.TYPE_CHECKING:
    from hookboard.events.models import EventRecord

type Categorizer = cabc.Callable[[EventRecord], str]


def event_type_of(event: EventRecord) -> str:
    """Categorize by GitHub event type."""
    return event.event_type


def repository_of(event: EventRecord) -> str:
    """Categorize by repository name."""
    return event.repository_label


def actor_of(event: EventRecord) -> str:
    """Categorize by the attributed actor."""
    return event.actor


def count_by(
    events: cabc.Iterable[EventRecord],
    categorize: Categorizer,
) -> dict[str, int]:
    """Count events per label produced by ``categorize``.

    Labels appear in the order they are first seen; empty labels are counted
    as ``Unknown``.
    """
    counts: dict[str, int] = {}
    for event in events:
        label = categorize(event) or UNKNOWN_LABEL
        counts[label] = counts.get(label, 0) + 1
    return counts
