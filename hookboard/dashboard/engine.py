"""Aggregation engine producing every derived dashboard view.

:func:`aggregate` is a pure function of its arguments: it reads the clock
only through ``now`` and never mutates the snapshot, so calling it twice with
the same inputs yields equal bundles. The bundle is rebuilt from scratch on
every snapshot or filter change.

Usage
-----
>>> import datetime as dt
>>> from hookboard.dashboard import DashboardFilters, aggregate
>>> bundle = aggregate(
...     [],
...     DashboardFilters(),
...     now=dt.datetime.now(dt.UTC),
...     tz=dt.UTC,
... )
>>> bundle.total_events
0

"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import typing as typ

from hookboard.common.time import calendar_date

from .config import DashboardConfig
from .counting import actor_of, count_by, event_type_of, repository_of
from .filters import (
    DashboardFilters,
    filter_by_repository,
    filter_by_time_range,
)
from .pagination import EventPage, paginate
from .ranking import RankedEntry, full_ranking, top_n
from .timeseries import DailyCount, daily_series
from .today import TodaySummary, summarise_today

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.events.models import EventRecord


@dc.dataclass(frozen=True, slots=True)
class DashboardBundle:
    """Every view derived from one snapshot and filter state.

    Attributes
    ----------
    filters
        Filter state the bundle was computed for.
    event_type_counts, repository_counts, team_counts, user_counts
        Per-label counts over ``filtered_events`` in first-seen order.
    daily_counts
        Contiguous, zero-filled per-day series.
    top_teams, top_users
        Leading entries of the team and user rankings.
    leaderboard
        Full user ranking.
    filtered_events
        Events passing both filters, in snapshot order.
    today
        Cards for the current calendar day (repository filter only).
    page
        The requested page of ``filtered_events``, clamped to range.
    repository_options
        Distinct repository names in the unfiltered snapshot.
    total_events, unique_repository_count, unique_team_count
        Scalar summaries: the size of ``filtered_events`` and the number of
        distinct repository and team labels in it.
    skipped_documents
        Documents the decoder rejected for this snapshot.

    """

    filters: DashboardFilters
    event_type_counts: dict[str, int]
    repository_counts: dict[str, int]
    team_counts: dict[str, int]
    user_counts: dict[str, int]
    daily_counts: tuple[DailyCount, ...]
    top_teams: tuple[RankedEntry, ...]
    top_users: tuple[RankedEntry, ...]
    leaderboard: tuple[RankedEntry, ...]
    filtered_events: tuple[EventRecord, ...]
    today: TodaySummary
    page: EventPage
    repository_options: tuple[str, ...]
    total_events: int
    unique_repository_count: int
    unique_team_count: int
    skipped_documents: int = 0

    def daily_count_map(self) -> dict[dt.date, int]:
        """Return ``daily_counts`` as an ordered date-to-count mapping."""
        return {entry.day: entry.count for entry in self.daily_counts}


def repository_options(events: cabc.Iterable[EventRecord]) -> tuple[str, ...]:
    """Return distinct repository names in first-seen order.

    Events without a repository name are excluded.
    """
    names = (event.repository_name for event in events if event.repository_name)
    return tuple(dict.fromkeys(names))


def aggregate(  # noqa: PLR0913
    events: cabc.Sequence[EventRecord],
    filters: DashboardFilters,
    *,
    now: dt.datetime,
    tz: dt.tzinfo,
    page: int = 1,
    config: DashboardConfig | None = None,
    skipped_documents: int = 0,
) -> DashboardBundle:
    """Compute the dashboard bundle for ``events`` under ``filters``.

    Parameters
    ----------
    events
        The full snapshot, unfiltered.
    filters
        Time-range and repository selection.
    now
        Timezone-aware instant used for time-range cutoffs and "today".
    tz
        Zone that defines calendar days.
    page
        Requested activity-table page; clamped into range.
    config
        Page size, ranking length and team labelling rules.
    skipped_documents
        Number of documents the decoder rejected, carried into the bundle.

    Returns
    -------
    DashboardBundle
        Freshly computed views; nothing is shared with earlier bundles.

    Raises
    ------
    TimezoneAwareRequiredError
        If ``now`` is naive.

    """
    cfg = config or DashboardConfig()
    labeler = cfg.team_labeler()

    by_repository = filter_by_repository(events, filters.repository)
    filtered = filter_by_time_range(by_repository, filters.time_range, now=now)
    today = calendar_date(now, tz)

    repository_counts = count_by(filtered, repository_of)
    team_counts = count_by(filtered, labeler)
    user_counts = count_by(filtered, actor_of)

    return DashboardBundle(
        filters=filters,
        event_type_counts=count_by(filtered, event_type_of),
        repository_counts=repository_counts,
        team_counts=team_counts,
        user_counts=user_counts,
        daily_counts=daily_series(filtered, today=today, tz=tz),
        top_teams=top_n(team_counts, cfg.top_n),
        top_users=top_n(user_counts, cfg.top_n),
        leaderboard=full_ranking(user_counts),
        filtered_events=filtered,
        today=summarise_today(by_repository, today=today, tz=tz, labeler=labeler),
        page=paginate(filtered, cfg.page_size, page),
        repository_options=repository_options(events),
        total_events=len(filtered),
        unique_repository_count=len(repository_counts),
        unique_team_count=len(team_counts),
        skipped_documents=skipped_documents,
    )
