"""Aggregation engine for the webhook activity dashboard."""

from __future__ import annotations

from .config import DashboardConfig
from .counting import actor_of, count_by, event_type_of, repository_of
from .engine import DashboardBundle, aggregate, repository_options
from .errors import DashboardConfigError, TimezoneAwareRequiredError
from .filters import (
    ALL_REPOSITORIES,
    DashboardFilters,
    TimeRange,
    cutoff_for,
    filter_by_repository,
    filter_by_time_range,
    filter_events,
)
from .pagination import (
    EventPage,
    clamp_page,
    next_page,
    paginate,
    previous_page,
    total_pages,
)
from .ranking import RankedEntry, full_ranking, top_n
from .teams import TeamLabeler
from .timeseries import DailyCount, daily_series
from .today import TodaySummary, summarise_today

__all__ = [
    "ALL_REPOSITORIES",
    "DailyCount",
    "DashboardBundle",
    "DashboardConfig",
    "DashboardConfigError",
    "DashboardFilters",
    "EventPage",
    "RankedEntry",
    "TeamLabeler",
    "TimeRange",
    "TimezoneAwareRequiredError",
    "TodaySummary",
    "actor_of",
    "aggregate",
    "clamp_page",
    "count_by",
    "cutoff_for",
    "daily_series",
    "event_type_of",
    "filter_by_repository",
    "filter_by_time_range",
    "filter_events",
    "full_ranking",
    "next_page",
    "paginate",
    "previous_page",
    "repository_of",
    "repository_options",
    "summarise_today",
    "top_n",
    "total_pages",
]
