"""Markdown renderer for dashboard bundles.

Lays out the same sections as the web dashboard: stat cards, activity by
event type, repository, team and day, the top-5 lists, the contributor
leaderboard and one page of recent activity.

Usage
-----
Render a bundle returned by :func:`~hookboard.dashboard.engine.aggregate`::

    markdown = render_dashboard_markdown(bundle, tz=dt.UTC)

"""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from hookboard.dashboard.filters import ALL_REPOSITORIES
from hookboard.dashboard.teams import TeamLabeler

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.dashboard.engine import DashboardBundle
    from hookboard.dashboard.ranking import RankedEntry
    from hookboard.events.models import EventRecord


def _escape_cell(value: str) -> str:
    """Escape pipes so labels cannot break table rows."""
    return value.replace("|", "\\|")


def _format_timestamp(value: dt.datetime, tz: dt.tzinfo) -> str:
    """Format an event timestamp in the dashboard time zone."""
    return value.astimezone(tz).strftime("%Y-%m-%d %H:%M:%S")


def _render_title(lines: list[str], bundle: DashboardBundle) -> None:
    repository = bundle.filters.repository
    scope = "All Repositories" if repository == ALL_REPOSITORIES else repository
    lines.append(f"# GitHub activity: {scope} ({bundle.filters.time_range.label})")
    lines.append("")


def _render_cards(lines: list[str], bundle: DashboardBundle) -> None:
    lines.append(f"- **Total events:** {bundle.total_events}")
    lines.append(f"- **Repositories:** {bundle.unique_repository_count}")
    lines.append(f"- **Today's activity:** {bundle.today.activity_count}")
    lines.append(f"- **Teams worked today:** {bundle.today.teams_worked}")
    if bundle.skipped_documents:
        lines.append(f"- **Skipped documents:** {bundle.skipped_documents}")
    lines.append("")


def _render_count_table(
    lines: list[str],
    heading: str,
    column: str,
    counts: cabc.Mapping[str, int],
) -> None:
    """Append a two-column count table if ``counts`` is non-empty."""
    if not counts:
        return
    lines.append(f"## {heading}")
    lines.append("")
    lines.append(f"| {column} | Events |")
    lines.append("| --- | ---: |")
    lines.extend(
        f"| {_escape_cell(label)} | {count} |" for label, count in counts.items()
    )
    lines.append("")


def _render_ranking(
    lines: list[str],
    heading: str,
    entries: cabc.Sequence[RankedEntry],
) -> None:
    """Append a numbered ranking if ``entries`` is non-empty."""
    if not entries:
        return
    lines.append(f"## {heading}")
    lines.append("")
    lines.extend(
        f"{entry.rank}. {entry.label} ({entry.count})" for entry in entries
    )
    lines.append("")


def _render_activity_row(
    event: EventRecord,
    labeler: TeamLabeler,
    tz: dt.tzinfo,
) -> str:
    cells = (
        event.event_type,
        event.repository_label,
        labeler(event),
        event.actor,
        _format_timestamp(event.received_at, tz),
    )
    return "| " + " | ".join(_escape_cell(cell) for cell in cells) + " |"


def _render_activity(
    lines: list[str],
    bundle: DashboardBundle,
    labeler: TeamLabeler,
    tz: dt.tzinfo,
) -> None:
    page = bundle.page
    lines.append("## Recent activity")
    lines.append("")
    if page.items:
        lines.append("| Event | Repository | Team | Username | Timestamp |")
        lines.append("| --- | --- | --- | --- | --- |")
        lines.extend(_render_activity_row(event, labeler, tz) for event in page.items)
    else:
        lines.append("*No events in the selected range.*")
    lines.append("")
    lines.append(f"Page {page.current_page} of {page.total_pages}")
    lines.append("")


def render_dashboard_markdown(
    bundle: DashboardBundle,
    *,
    tz: dt.tzinfo,
    labeler: TeamLabeler | None = None,
) -> str:
    """Render ``bundle`` as a Markdown document.

    Parameters
    ----------
    bundle
        Derived views to render.
    tz
        Zone used for activity timestamps; should match the zone the bundle
        was aggregated in.
    labeler
        Team labeler for the activity table; defaults to the standard
        separator-based labeler.

    Returns
    -------
    str
        The complete Markdown document.

    """
    team_labeler = labeler or TeamLabeler()
    lines: list[str] = []

    _render_title(lines, bundle)
    _render_cards(lines, bundle)
    _render_count_table(lines, "Event types", "Event", bundle.event_type_counts)
    _render_count_table(lines, "Team activity", "Team", bundle.team_counts)
    _render_count_table(
        lines,
        "Daily activity",
        "Date",
        {entry.day.isoformat(): entry.count for entry in bundle.daily_counts},
    )
    _render_ranking(lines, "Top teams", bundle.top_teams)
    _render_ranking(lines, "Top users", bundle.top_users)
    _render_count_table(
        lines, "Repository activity", "Repository", bundle.repository_counts
    )
    _render_ranking(lines, "Leaderboard", bundle.leaderboard)
    _render_activity(lines, bundle, team_labeler, tz)

    return "\n".join(lines)
