"""Configuration for dashboard aggregation.

Usage
-----
Create a configuration with defaults:

>>> config = DashboardConfig()
>>> config.page_size
10

Or load from environment variables, for example with
``HOOKBOARD_PAGE_SIZE=25`` exported::

    config = DashboardConfig.from_env()

"""

from __future__ import annotations

import dataclasses as dc
import os
import typing as typ
import zoneinfo

from hookboard.common.time import resolve_timezone

from .errors import DashboardConfigError
from .pagination import DEFAULT_PAGE_SIZE
from .teams import DEFAULT_TEAM_SEPARATOR, TeamLabeler

if typ.TYPE_CHECKING:
    import datetime as dt

DEFAULT_TOP_N: typ.Final = 5


def _parse_positive_int(env_var: str, default: int | None) -> int | None:
    """Read a positive integer env var, falling back to ``default``."""
    raw = os.environ.get(env_var, "")
    if not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError as exc:
        raise DashboardConfigError.not_an_integer(env_var, raw) from exc
    if value < 1:
        raise DashboardConfigError.not_positive(env_var, value)
    return value


@dc.dataclass(frozen=True, slots=True)
class DashboardConfig:
    """Settings that shape the derived dashboard views.

    Attributes
    ----------
    page_size
        Rows per activity-table page. Default is 10.
    top_n
        Length of the top-teams and top-users lists. Default is 5.
    team_separator
        Delimiter between repository prefix and team name.
    team_prefix_length
        Optional fixed prefix length; overrides ``team_separator`` when set.
    timezone_name
        IANA zone used for calendar-day bucketing. ``None`` selects the
        host's local zone.

    """

    page_size: int = DEFAULT_PAGE_SIZE
    top_n: int = DEFAULT_TOP_N
    team_separator: str = DEFAULT_TEAM_SEPARATOR
    team_prefix_length: int | None = None
    timezone_name: str | None = None

    def __post_init__(self) -> None:
        """Validate numeric settings."""
        if self.page_size < 1:
            raise DashboardConfigError.not_positive("page_size", self.page_size)
        if self.top_n < 1:
            raise DashboardConfigError.not_positive("top_n", self.top_n)

    def team_labeler(self) -> TeamLabeler:
        """Return the team labeler described by this configuration."""
        return TeamLabeler(
            separator=self.team_separator,
            prefix_length=self.team_prefix_length,
        )

    def timezone(self) -> dt.tzinfo:
        """Resolve ``timezone_name`` into a tzinfo.

        Raises
        ------
        DashboardConfigError
            If the zone name is unknown.

        """
        try:
            return resolve_timezone(self.timezone_name)
        except (zoneinfo.ZoneInfoNotFoundError, ValueError) as exc:
            raise DashboardConfigError.unknown_timezone(
                self.timezone_name or ""
            ) from exc

    @classmethod
    def from_env(cls) -> DashboardConfig:
        """Create configuration from environment variables.

        Reads ``HOOKBOARD_PAGE_SIZE``, ``HOOKBOARD_TOP_N``,
        ``HOOKBOARD_TEAM_SEPARATOR``, ``HOOKBOARD_TEAM_PREFIX_LENGTH`` and
        ``HOOKBOARD_TIMEZONE``. Unset or blank variables keep their defaults.

        Raises
        ------
        DashboardConfigError
            If a numeric variable is not a positive integer.

        """
        page_size = _parse_positive_int("HOOKBOARD_PAGE_SIZE", DEFAULT_PAGE_SIZE)
        top_n = _parse_positive_int("HOOKBOARD_TOP_N", DEFAULT_TOP_N)
        prefix_length = _parse_positive_int("HOOKBOARD_TEAM_PREFIX_LENGTH", None)

        separator = os.environ.get("HOOKBOARD_TEAM_SEPARATOR", "")
        timezone_name = os.environ.get("HOOKBOARD_TIMEZONE", "").strip() or None

        return cls(
            page_size=page_size or DEFAULT_PAGE_SIZE,
            top_n=top_n or DEFAULT_TOP_N,
            team_separator=separator or DEFAULT_TEAM_SEPARATOR,
            team_prefix_length=prefix_length,
            timezone_name=timezone_name,
        )
