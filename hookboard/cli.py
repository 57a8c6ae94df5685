"""Render a webhook snapshot file as a Markdown or JSON dashboard."""

from __future__ import annotations

import argparse
import asyncio
import contextlib
import dataclasses as dc
import os
import sys
import typing as typ
from pathlib import Path

import msgspec

from hookboard.common.time import utcnow
from hookboard.dashboard.config import DashboardConfig
from hookboard.dashboard.engine import aggregate
from hookboard.dashboard.errors import DashboardConfigError
from hookboard.dashboard.filters import (
    ALL_REPOSITORIES,
    DashboardFilters,
    TimeRange,
)
from hookboard.events.decoding import decode_snapshot_json
from hookboard.events.errors import SnapshotDecodeError
from hookboard.logging import (
    LOG_LEVEL_ENV_VAR,
    configure_logging,
    get_logger,
    log_exception,
    log_warning,
)
from hookboard.render.markdown import render_dashboard_markdown
from hookboard.stream.channel import SnapshotChannel
from hookboard.stream.session import DashboardSession
from hookboard.stream.source import SnapshotFileSource

if typ.TYPE_CHECKING:
    from hookboard.dashboard.engine import DashboardBundle

logger = get_logger(__name__)


def _positive_float(raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        msg = f"not a number: {raw!r}"
        raise argparse.ArgumentTypeError(msg) from exc
    if not value > 0:
        msg = f"must be positive, got: {raw}"
        raise argparse.ArgumentTypeError(msg)
    return value


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="hookboard", description=__doc__)
    parser.add_argument(
        "snapshot", type=Path, help="JSON file of webhook documents"
    )
    parser.add_argument(
        "--range",
        dest="time_range",
        choices=[time_range.value for time_range in TimeRange],
        default=TimeRange.LAST_7_DAYS.value,
        help="Time range to aggregate (default: 7d)",
    )
    parser.add_argument(
        "--repo",
        default=ALL_REPOSITORIES,
        help="Repository name to restrict to (default: all)",
    )
    parser.add_argument(
        "--page", type=int, default=1, help="Activity page to show"
    )
    parser.add_argument(
        "--timezone",
        default=None,
        help="IANA time zone for calendar days (default: HOOKBOARD_TIMEZONE)",
    )
    parser.add_argument(
        "--json",
        action="store_true",
        help="Emit the derived views as JSON instead of Markdown",
    )
    parser.add_argument(
        "--watch",
        action="store_true",
        help="Re-render whenever the snapshot file changes",
    )
    parser.add_argument(
        "--interval",
        type=_positive_float,
        default=5.0,
        help="Polling interval in seconds for --watch (default: 5)",
    )
    return parser


def _load_config(timezone: str | None) -> DashboardConfig:
    config = DashboardConfig.from_env()
    if timezone is not None:
        config = dc.replace(config, timezone_name=timezone)
    # Resolve eagerly so an unknown zone fails before any work is done.
    config.timezone()
    return config


def _render_once(
    args: argparse.Namespace,
    config: DashboardConfig,
    filters: DashboardFilters,
) -> int:
    tz = config.timezone()
    try:
        decoded = decode_snapshot_json(args.snapshot.read_bytes(), tz=tz)
    except OSError as exc:
        log_exception(logger, "Snapshot read failed", exc)
        print(f"cannot read snapshot {args.snapshot}: {exc}", file=sys.stderr)
        return 1
    except SnapshotDecodeError as exc:
        log_exception(logger, "Snapshot decode failed", exc)
        print(f"snapshot {args.snapshot} is invalid: {exc}", file=sys.stderr)
        return 1

    bundle = aggregate(
        decoded.events,
        filters,
        now=utcnow(),
        tz=tz,
        page=args.page,
        config=config,
        skipped_documents=decoded.skipped_count,
    )
    if args.json:
        print(msgspec.json.encode(bundle).decode("utf-8"))
    else:
        labeler = config.team_labeler()
        print(render_dashboard_markdown(bundle, tz=tz, labeler=labeler))
    return 0


def _watch(
    args: argparse.Namespace,
    config: DashboardConfig,
    filters: DashboardFilters,
) -> int:
    tz = config.timezone()
    labeler = config.team_labeler()

    def _print(bundle: DashboardBundle) -> None:
        if args.json:
            output = msgspec.json.encode(bundle).decode("utf-8")
        else:
            output = render_dashboard_markdown(bundle, tz=tz, labeler=labeler)
        print(output, flush=True)

    session = DashboardSession(
        config=config,
        filters=filters,
        on_update=_print,
        source_name=str(args.snapshot),
    )
    with SnapshotChannel() as channel:
        session.attach(channel)
        session.go_to_page(args.page)
        source = SnapshotFileSource(args.snapshot, channel, tz=tz)
        try:
            with contextlib.suppress(KeyboardInterrupt):
                asyncio.run(source.run(args.interval))
        finally:
            session.detach()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Aggregate a snapshot file and print the dashboard.

    Parameters
    ----------
    argv : list[str] | None, optional
        Command-line arguments. ``None`` defaults to ``sys.argv``.

    Returns
    -------
    int
        Exit code: 0 on success, 1 when the snapshot or configuration is
        invalid.

    """
    args = _build_parser().parse_args(argv)

    raw_level = os.environ.get(LOG_LEVEL_ENV_VAR, "INFO")
    level, invalid_level = configure_logging(raw_level)
    if invalid_level:
        log_warning(
            logger,
            "Invalid %s %r, falling back to %s",
            LOG_LEVEL_ENV_VAR,
            raw_level,
            level,
        )

    try:
        config = _load_config(args.timezone)
    except DashboardConfigError as exc:
        print(f"invalid configuration: {exc}", file=sys.stderr)
        return 1

    filters = DashboardFilters(
        time_range=TimeRange(args.time_range),
        repository=args.repo,
    )
    if args.watch:
        return _watch(args, config, filters)
    return _render_once(args, config, filters)


if __name__ == "__main__":
    raise SystemExit(main())
