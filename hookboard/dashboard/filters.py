"""Repository and time-range filters applied before aggregation.

Both filters are plain predicates over :class:`EventRecord` values and
therefore commute; :func:`filter_events` applies the repository filter first
only because it is the cheaper of the two.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import datetime as dt
import enum
import typing as typ

from hookboard.common.time import EPOCH

from .errors import TimezoneAwareRequiredError

if typ.TYPE_CHECKING:
    from hookboard.events.models import EventRecord

ALL_REPOSITORIES: typ.Final = "all"


class TimeRange(enum.StrEnum):
    """Selectable look-back windows for the dashboard."""

    LAST_24_HOURS = "24h"
    LAST_7_DAYS = "7d"
    LAST_30_DAYS = "30d"
    ALL_TIME = "all"

    @property
    def label(self) -> str:
        """Return the human-readable name shown in selectors."""
        return _TIME_RANGE_LABELS[self]


_TIME_RANGE_LABELS: dict[TimeRange, str] = {
    TimeRange.LAST_24_HOURS: "Last 24 hours",
    TimeRange.LAST_7_DAYS: "Last 7 days",
    TimeRange.LAST_30_DAYS: "Last 30 days",
    TimeRange.ALL_TIME: "All time",
}

_LOOKBACK: dict[TimeRange, dt.timedelta] = {
    TimeRange.LAST_24_HOURS: dt.timedelta(days=1),
    TimeRange.LAST_7_DAYS: dt.timedelta(days=7),
    TimeRange.LAST_30_DAYS: dt.timedelta(days=30),
}


@dataclasses.dataclass(frozen=True, slots=True)
class DashboardFilters:
    """Filter state selected by the dashboard user.

    Attributes
    ----------
    time_range
        Look-back window; defaults to the last seven days.
    repository
        Either :data:`ALL_REPOSITORIES` or one exact repository name.

    """

    time_range: TimeRange = TimeRange.LAST_7_DAYS
    repository: str = ALL_REPOSITORIES

    @property
    def selects_all_repositories(self) -> bool:
        """Return True when no repository restriction applies."""
        return self.repository == ALL_REPOSITORIES


def _require_aware(now: dt.datetime) -> None:
    if now.tzinfo is None or now.tzinfo.utcoffset(now) is None:
        raise TimezoneAwareRequiredError("now")


def cutoff_for(time_range: TimeRange, now: dt.datetime) -> dt.datetime:
    """Return the earliest instant retained by ``time_range``.

    ``ALL_TIME`` maps to the Unix epoch; the other ranges subtract a fixed
    number of days from ``now``.
    """
    _require_aware(now)
    lookback = _LOOKBACK.get(time_range)
    if lookback is None:
        return EPOCH
    return now - lookback


def filter_by_repository(
    events: cabc.Iterable[EventRecord],
    repository: str,
) -> tuple[EventRecord, ...]:
    """Keep events whose repository name equals ``repository`` exactly.

    Events without a repository never match a literal selection.
    """
    if repository == ALL_REPOSITORIES:
        return tuple(events)
    return tuple(event for event in events if event.repository_name == repository)


def filter_by_time_range(
    events: cabc.Iterable[EventRecord],
    time_range: TimeRange,
    *,
    now: dt.datetime,
) -> tuple[EventRecord, ...]:
    """Keep events received at or after the cutoff for ``time_range``."""
    cutoff = cutoff_for(time_range, now)
    return tuple(event for event in events if event.received_at >= cutoff)


def filter_events(
    events: cabc.Iterable[EventRecord],
    time_range: TimeRange,
    repository: str,
    *,
    now: dt.datetime,
) -> tuple[EventRecord, ...]:
    """Apply the repository and time-range filters, preserving input order."""
    by_repository = filter_by_repository(events, repository)
    return filter_by_time_range(by_repository, time_range, now=now)
