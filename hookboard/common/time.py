"""Clock and calendar helpers shared by the decoder and the dashboard.

Calendar-date truncation lives here so the daily series and the "today"
summary cannot disagree about where midnight falls.
"""

from __future__ import annotations

import datetime as dt
import os
import pathlib
import zoneinfo

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.UTC)
LOCALTIME_PATH = pathlib.Path("/etc/localtime")


def utcnow() -> dt.datetime:
    """Return an aware UTC timestamp."""
    return dt.datetime.now(dt.UTC)


def local_timezone() -> dt.tzinfo:
    """Return the host's local time zone with its daylight-saving rules.

    ``TZ`` naming an IANA zone wins, then ``/etc/localtime``. A ``TZ`` value
    zoneinfo cannot load, or a host with neither, gets the current UTC offset.
    """
    key = os.environ.get("TZ", "").strip().removeprefix(":")
    if key:
        try:
            return zoneinfo.ZoneInfo(key)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError):
            return _current_offset()
    try:
        with LOCALTIME_PATH.open("rb") as handle:
            return zoneinfo.ZoneInfo.from_file(handle, key="localtime")
    except (OSError, ValueError):
        return _current_offset()


def _current_offset() -> dt.tzinfo:
    tz = dt.datetime.now().astimezone().tzinfo
    return tz if tz is not None else dt.UTC


def resolve_timezone(name: str | None) -> dt.tzinfo:
    """Resolve an IANA time zone name, defaulting to the host's local zone.

    Raises
    ------
    zoneinfo.ZoneInfoNotFoundError
        If ``name`` is not a known time zone.
    ValueError
        If ``name`` is not a well-formed time zone key.

    """
    if name is None or not name.strip():
        return local_timezone()
    return zoneinfo.ZoneInfo(name.strip())


def ensure_aware(value: dt.datetime, tz: dt.tzinfo) -> dt.datetime:
    """Attach ``tz`` to naive datetimes; aware values are returned unchanged."""
    if value.tzinfo is None or value.tzinfo.utcoffset(value) is None:
        return value.replace(tzinfo=tz)
    return value


def calendar_date(value: dt.datetime, tz: dt.tzinfo) -> dt.date:
    """Truncate an aware instant to its calendar date in ``tz``."""
    return value.astimezone(tz).date()


def iter_dates(start: dt.date, end: dt.date) -> list[dt.date]:
    """Return every calendar date from ``start`` to ``end`` inclusive."""
    days = (end - start).days
    return [start + dt.timedelta(days=offset) for offset in range(days + 1)]
