"""Unit tests for clock and calendar helpers."""

from __future__ import annotations

import datetime as dt
import importlib.resources
import typing as typ
import zoneinfo

import pytest

from hookboard.common import time as time_helpers
from hookboard.common.time import (
    EPOCH,
    calendar_date,
    ensure_aware,
    iter_dates,
    local_timezone,
    resolve_timezone,
    utcnow,
)

PLUS_TWO = dt.timezone(dt.timedelta(hours=2))

if typ.TYPE_CHECKING:
    from pathlib import Path


def test_utcnow_is_aware() -> None:
    """utcnow returns a UTC-aware datetime."""
    assert utcnow().utcoffset() == dt.timedelta(0)


def test_epoch_is_unix_epoch() -> None:
    """EPOCH corresponds to timestamp zero."""
    assert EPOCH.timestamp() == 0


def test_ensure_aware_attaches_zone_to_naive_values() -> None:
    """Naive values take the supplied zone without shifting wall time."""
    naive = dt.datetime(2024, 7, 1, 9, 30)  # noqa: DTZ001

    aware = ensure_aware(naive, PLUS_TWO)

    assert aware.tzinfo is PLUS_TWO
    assert (aware.hour, aware.minute) == (9, 30)


def test_ensure_aware_keeps_aware_values() -> None:
    """Aware values are returned as-is."""
    value = dt.datetime(2024, 7, 1, 9, 30, tzinfo=dt.UTC)
    assert ensure_aware(value, PLUS_TWO) is value


@pytest.mark.parametrize(
    ("instant", "expected"),
    [
        pytest.param(
            dt.datetime(2024, 7, 9, 21, 59, tzinfo=dt.UTC),
            dt.date(2024, 7, 9),
            id="before-local-midnight",
        ),
        pytest.param(
            dt.datetime(2024, 7, 9, 22, 0, tzinfo=dt.UTC),
            dt.date(2024, 7, 10),
            id="at-local-midnight",
        ),
    ],
)
def test_calendar_date_truncates_in_target_zone(
    instant: dt.datetime, expected: dt.date
) -> None:
    """Dates are taken in the dashboard zone, not in UTC."""
    assert calendar_date(instant, PLUS_TWO) == expected


def test_iter_dates_is_inclusive() -> None:
    """Both endpoints are included, in ascending order."""
    days = iter_dates(dt.date(2024, 2, 27), dt.date(2024, 3, 1))
    assert days == [
        dt.date(2024, 2, 27),
        dt.date(2024, 2, 28),
        dt.date(2024, 2, 29),
        dt.date(2024, 3, 1),
    ]


def test_iter_dates_single_day() -> None:
    """Equal endpoints produce a one-element range."""
    day = dt.date(2024, 1, 1)
    assert iter_dates(day, day) == [day]


@pytest.mark.parametrize("name", [None, "", "   "])
def test_resolve_timezone_defaults_to_local_zone(name: str | None) -> None:
    """Blank names resolve to an aware local zone."""
    tz = resolve_timezone(name)
    assert dt.datetime(2024, 1, 1, tzinfo=tz).utcoffset() is not None


def test_resolve_timezone_rejects_unknown_names() -> None:
    """Unknown IANA names raise ZoneInfoNotFoundError."""
    with pytest.raises(zoneinfo.ZoneInfoNotFoundError):
        resolve_timezone("Mars/Olympus_Mons")


# 22:30 UTC is 23:30 in Berlin during winter and 00:30 the next day in summer.
_BERLIN_DAYS = [
    pytest.param(
        dt.datetime(2026, 1, 10, 22, 30, tzinfo=dt.UTC),
        dt.date(2026, 1, 10),
        id="winter",
    ),
    pytest.param(
        dt.datetime(2026, 7, 10, 22, 30, tzinfo=dt.UTC),
        dt.date(2026, 7, 11),
        id="summer",
    ),
]


class TestLocalTimezone:
    """The host zone keeps its daylight-saving rules across the year."""

    @pytest.mark.parametrize(("instant", "expected"), _BERLIN_DAYS)
    def test_tz_variable_names_the_zone(
        self,
        monkeypatch: pytest.MonkeyPatch,
        instant: dt.datetime,
        expected: dt.date,
    ) -> None:
        """An IANA name in TZ resolves to that zone, not today's offset."""
        monkeypatch.setenv("TZ", "Europe/Berlin")
        assert calendar_date(instant, local_timezone()) == expected

    @pytest.mark.parametrize(("instant", "expected"), _BERLIN_DAYS)
    def test_localtime_file_is_used_without_tz(
        self,
        monkeypatch: pytest.MonkeyPatch,
        tmp_path: Path,
        instant: dt.datetime,
        expected: dt.date,
    ) -> None:
        """Without TZ the zone is loaded from the host's localtime file."""
        berlin = importlib.resources.files("tzdata.zoneinfo") / "Europe" / "Berlin"
        localtime = tmp_path / "localtime"
        localtime.write_bytes(berlin.read_bytes())
        monkeypatch.delenv("TZ", raising=False)
        monkeypatch.setattr(time_helpers, "LOCALTIME_PATH", localtime)

        assert calendar_date(instant, local_timezone()) == expected

    def test_unloadable_tz_falls_back_to_an_offset(
        self, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        """A POSIX-style TZ string still yields an aware zone."""
        monkeypatch.setenv("TZ", "CET-1CEST,M3.5.0,M10.5.0/3")
        tz = local_timezone()
        assert dt.datetime(2026, 1, 1, tzinfo=tz).utcoffset() is not None
