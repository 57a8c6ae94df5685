"""Latest-snapshot-wins delivery channel.

The channel holds only the most recent snapshot. Publishing replaces it and
notifies every active subscriber synchronously; there is no queue, so a
subscriber never sees an older snapshot after a newer one. New subscribers
receive the current snapshot immediately.

Usage
-----
>>> from hookboard.events.decoding import DecodedSnapshot
>>> channel = SnapshotChannel()
>>> received = []
>>> subscription = channel.subscribe(received.append)
>>> snapshot = channel.publish(DecodedSnapshot(events=()))
>>> [delivered.version for delivered in received]
[1]
>>> subscription.unsubscribe()

"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import itertools
import typing as typ

from hookboard.common.time import utcnow

from .errors import SnapshotChannelClosedError

if typ.TYPE_CHECKING:
    import datetime as dt
    import types

    from hookboard.events.decoding import DecodedSnapshot
    from hookboard.events.models import EventRecord

type SnapshotHandler = cabc.Callable[[Snapshot], None]
type ErrorHandler = cabc.Callable[[BaseException], None]


@dataclasses.dataclass(frozen=True, slots=True)
class Snapshot:
    """A full-replace snapshot with a monotonically increasing version."""

    version: int
    events: tuple[EventRecord, ...]
    published_at: dt.datetime
    skipped_documents: int = 0


class Subscription:
    """Handle returned by :meth:`SnapshotChannel.subscribe`."""

    def __init__(
        self,
        channel: SnapshotChannel,
        on_snapshot: SnapshotHandler,
        on_error: ErrorHandler | None,
    ) -> None:
        """Bind the handlers to ``channel``."""
        self._channel = channel
        self._on_snapshot = on_snapshot
        self._on_error = on_error
        self._active = True

    @property
    def active(self) -> bool:
        """Return True until the subscription is cancelled."""
        return self._active

    def unsubscribe(self) -> None:
        """Stop delivery. Safe to call more than once."""
        if not self._active:
            return
        self._active = False
        self._channel._remove(self)  # noqa: SLF001 - channel owns the registry

    def _deliver(self, snapshot: Snapshot) -> None:
        if self._active:
            self._on_snapshot(snapshot)

    def _deliver_error(self, error: BaseException) -> None:
        if self._active and self._on_error is not None:
            self._on_error(error)


class SnapshotChannel:
    """Hold the latest snapshot and fan it out to subscribers."""

    def __init__(self) -> None:
        """Start empty and open."""
        self._subscriptions: list[Subscription] = []
        self._latest: Snapshot | None = None
        self._versions = itertools.count(1)
        self._closed = False

    @property
    def latest(self) -> Snapshot | None:
        """Return the most recently published snapshot, if any."""
        return self._latest

    @property
    def closed(self) -> bool:
        """Return True once :meth:`close` has been called."""
        return self._closed

    @property
    def subscriber_count(self) -> int:
        """Return the number of active subscriptions."""
        return len(self._subscriptions)

    def subscribe(
        self,
        on_snapshot: SnapshotHandler,
        on_error: ErrorHandler | None = None,
    ) -> Subscription:
        """Register handlers and replay the latest snapshot to them.

        Raises
        ------
        SnapshotChannelClosedError
            If the channel is closed.

        """
        if self._closed:
            raise SnapshotChannelClosedError
        subscription = Subscription(self, on_snapshot, on_error)
        self._subscriptions.append(subscription)
        if self._latest is not None:
            subscription._deliver(self._latest)  # noqa: SLF001
        return subscription

    def publish(self, decoded: DecodedSnapshot) -> Snapshot:
        """Replace the latest snapshot and notify subscribers.

        Raises
        ------
        SnapshotChannelClosedError
            If the channel is closed.

        """
        if self._closed:
            raise SnapshotChannelClosedError
        snapshot = Snapshot(
            version=next(self._versions),
            events=decoded.events,
            published_at=utcnow(),
            skipped_documents=decoded.skipped_count,
        )
        self._latest = snapshot
        for subscription in tuple(self._subscriptions):
            subscription._deliver(snapshot)  # noqa: SLF001
        return snapshot

    def report_error(self, error: BaseException) -> None:
        """Forward a source failure to subscribers; the latest snapshot stays."""
        if self._closed:
            return
        for subscription in tuple(self._subscriptions):
            subscription._deliver_error(error)  # noqa: SLF001

    def close(self) -> None:
        """Cancel every subscription and reject further publishes."""
        for subscription in tuple(self._subscriptions):
            subscription.unsubscribe()
        self._closed = True

    def _remove(self, subscription: Subscription) -> None:
        if subscription in self._subscriptions:
            self._subscriptions.remove(subscription)

    def __enter__(self) -> SnapshotChannel:
        """Return the channel for use in a ``with`` block."""
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: types.TracebackType | None,
    ) -> None:
        """Close the channel on exit."""
        self.close()
