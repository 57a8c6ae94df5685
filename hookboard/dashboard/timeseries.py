"""Zero-filled daily activity series."""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import typing as typ

from hookboard.common.time import calendar_date, iter_dates

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.events.models import EventRecord


@dataclasses.dataclass(frozen=True, slots=True)
class DailyCount:
    """Number of events received on one calendar day."""

    day: dt.date
    count: int


def tally_by_day(
    events: cabc.Iterable[EventRecord],
    *,
    tz: dt.tzinfo,
) -> dict[dt.date, int]:
    """Count events per calendar date in ``tz`` without filling gaps."""
    tally: dict[dt.date, int] = {}
    for event in events:
        day = calendar_date(event.received_at, tz)
        tally[day] = tally.get(day, 0) + 1
    return tally


def daily_series(
    events: cabc.Iterable[EventRecord],
    *,
    today: dt.date,
    tz: dt.tzinfo,
) -> tuple[DailyCount, ...]:
    """Return a contiguous, ascending per-day series for ``events``.

    The series starts at the earliest event date and runs to the later of the
    latest event date and ``today``. Days without events carry a zero count.
    An empty input yields an empty series.
    """
    tally = tally_by_day(events, tz=tz)
    if not tally:
        return ()

    start = min(tally)
    end = max(max(tally), today)
    return tuple(
        DailyCount(day=day, count=tally.get(day, 0))
        for day in iter_dates(start, end)
    )
