"""Stateful dashboard session driven by a snapshot channel.

The session owns the state the user can change (filters and current page)
and the last good snapshot. Every snapshot delivery and every state change
triggers one full :func:`~hookboard.dashboard.engine.aggregate` call; the
resulting page index is written back so it stays within range when the
filtered set shrinks.
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import typing as typ

from hookboard.common.time import utcnow
from hookboard.dashboard.config import DashboardConfig
from hookboard.dashboard.engine import aggregate
from hookboard.dashboard.filters import DashboardFilters
from hookboard.dashboard.pagination import next_page, previous_page

from .observability import SnapshotEventLogger

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.dashboard.engine import DashboardBundle
    from hookboard.dashboard.filters import TimeRange

    from .channel import Snapshot, SnapshotChannel, Subscription

type Clock = cabc.Callable[[], dt.datetime]
type BundleListener = cabc.Callable[[DashboardBundle], None]


class DashboardSession:
    """Recompute dashboard views for the latest snapshot and current state."""

    def __init__(
        self,
        *,
        config: DashboardConfig | None = None,
        filters: DashboardFilters | None = None,
        clock: Clock = utcnow,
        tz: dt.tzinfo | None = None,
        on_update: BundleListener | None = None,
        source_name: str = "session",
    ) -> None:
        """Create a session with initial state; no snapshot has arrived yet.

        ``tz`` overrides the zone named by ``config``.
        """
        self._config = config or DashboardConfig()
        self._tz = tz or self._config.timezone()
        self._filters = filters or DashboardFilters()
        self._clock = clock
        self._on_update = on_update
        self._events = SnapshotEventLogger(source_name)
        self._page = 1
        self._snapshot: Snapshot | None = None
        self._applied_version = 0
        self._bundle: DashboardBundle | None = None
        self._last_error: BaseException | None = None
        self._subscription: Subscription | None = None

    @property
    def filters(self) -> DashboardFilters:
        """Return the current filter state."""
        return self._filters

    @property
    def current_page(self) -> int:
        """Return the current, always in-range, page index."""
        return self._page

    @property
    def bundle(self) -> DashboardBundle | None:
        """Return the bundle for the last good snapshot, if any."""
        return self._bundle

    @property
    def last_error(self) -> BaseException | None:
        """Return the error of the current failure run, if any."""
        return self._last_error

    @property
    def loading(self) -> bool:
        """Return True until a snapshot or an error has been received."""
        return self._snapshot is None and self._last_error is None

    def attach(self, channel: SnapshotChannel) -> Subscription:
        """Subscribe to ``channel``, replacing any previous subscription."""
        self.detach()
        # Versions are per channel; start counting afresh.
        self._applied_version = 0
        self._subscription = channel.subscribe(
            self.handle_snapshot, self.handle_error
        )
        return self._subscription

    def detach(self) -> None:
        """Unsubscribe from the current channel, if attached."""
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    def handle_snapshot(self, snapshot: Snapshot) -> None:
        """Adopt ``snapshot`` unless a newer one has already been applied."""
        if snapshot.version <= self._applied_version:
            return
        self._applied_version = snapshot.version
        self._snapshot = snapshot
        if self._last_error is not None:
            self._last_error = None
            self._events.log_session_recovered(snapshot.version)
        self._recompute()

    def handle_error(self, error: BaseException) -> None:
        """Record a source failure, logging only the first of a run.

        The last good bundle is kept.
        """
        if self._last_error is None:
            self._events.log_source_failed(error)
        self._last_error = error

    def set_filters(self, filters: DashboardFilters) -> None:
        """Replace both filters and recompute."""
        self._filters = filters
        self._recompute()

    def set_time_range(self, time_range: TimeRange) -> None:
        """Change the time-range filter and recompute."""
        self.set_filters(dataclasses.replace(self._filters, time_range=time_range))

    def set_repository(self, repository: str) -> None:
        """Change the repository filter and recompute."""
        self.set_filters(dataclasses.replace(self._filters, repository=repository))

    def go_to_page(self, page: int) -> None:
        """Request ``page``; the engine clamps it into range."""
        self._page = page
        self._recompute()

    def next_page(self) -> None:
        """Advance one page, stopping at the last page."""
        total = self._bundle.page.total_pages if self._bundle is not None else 1
        self.go_to_page(next_page(self._page, total))

    def previous_page(self) -> None:
        """Go back one page, stopping at the first page."""
        self.go_to_page(previous_page(self._page))

    def _recompute(self) -> None:
        snapshot = self._snapshot
        if snapshot is None:
            return
        bundle = aggregate(
            snapshot.events,
            self._filters,
            now=self._clock(),
            tz=self._tz,
            page=self._page,
            config=self._config,
            skipped_documents=snapshot.skipped_documents,
        )
        self._bundle = bundle
        self._page = bundle.page.current_page
        self._events.log_session_recomputed(snapshot.version, bundle)
        if self._on_update is not None:
            self._on_update(bundle)
