"""Summary cards for the current calendar day."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import typing as typ

from hookboard.common.time import calendar_date

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.events.models import EventRecord

    from .teams import TeamLabeler


@dataclasses.dataclass(frozen=True, slots=True)
class TodaySummary:
    """Activity received on ``day``.

    Attributes
    ----------
    day
        The calendar date treated as "today".
    events
        Events whose calendar date equals ``day``, in input order.
    activity_count
        Number of ``events``.
    teams_worked
        Number of distinct team labels among ``events``.

    """

    day: dt.date
    events: tuple[EventRecord, ...]
    activity_count: int
    teams_worked: int


def summarise_today(
    events: cabc.Iterable[EventRecord],
    *,
    today: dt.date,
    tz: dt.tzinfo,
    labeler: TeamLabeler,
) -> TodaySummary:
    """Build the "today" cards from repository-filtered events.

    The time-range filter does not apply: "today" is always the
    current calendar day in ``tz``.
    """
    todays_events = tuple(
        event for event in events if calendar_date(event.received_at, tz) == today
    )
    teams = {labeler(event) for event in todays_events}
    return TodaySummary(
        day=today,
        events=todays_events,
        activity_count=len(todays_events),
        teams_worked=len(teams),
    )
