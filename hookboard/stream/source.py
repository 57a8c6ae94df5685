"""Polling snapshot source backed by a JSON file.

The source re-reads the file on every poll, and decodes and publishes it only
when its content hash changes. Read and decode failures are reported to the
channel and retried on the next poll; they never replace the last good
snapshot. When a failure run ends with the file back at its last good content,
that snapshot is published again so subscribers can clear the error.
"""

from __future__ import annotations

import asyncio
import hashlib
import pathlib
import typing as typ

from hookboard.events.decoding import decode_snapshot_json
from hookboard.events.errors import SnapshotDecodeError

from .errors import SnapshotSourceError
from .observability import SnapshotEventLogger

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.events.decoding import DecodedSnapshot

    from .channel import SnapshotChannel


class SnapshotFileSource:
    """Publish a JSON snapshot file to a channel whenever it changes."""

    def __init__(
        self,
        path: pathlib.Path | str,
        channel: SnapshotChannel,
        *,
        tz: dt.tzinfo,
    ) -> None:
        """Bind the source to ``path`` and ``channel``."""
        self.path = pathlib.Path(path)
        self.channel = channel
        self.tz = tz
        self._events = SnapshotEventLogger(str(self.path))
        self._last_digest: str | None = None
        self._last_decoded: DecodedSnapshot | None = None
        self._failing = False

    def tick(self) -> bool:
        """Poll once; return True when a new snapshot was published."""
        try:
            data = self._read()
        except SnapshotSourceError as exc:
            self._report(exc)
            return False
        return self._process(data)

    async def run(
        self,
        poll_interval: float = 5.0,
        *,
        stop: asyncio.Event | None = None,
    ) -> None:
        """Poll every ``poll_interval`` seconds until ``stop`` is set."""
        while stop is None or not stop.is_set():
            await self._tick_async()
            if stop is None:
                await asyncio.sleep(poll_interval)
                continue
            try:
                await asyncio.wait_for(stop.wait(), timeout=poll_interval)
            except TimeoutError:
                continue

    def _read(self) -> bytes:
        try:
            return self.path.read_bytes()
        except OSError as exc:
            raise SnapshotSourceError.unreadable(self.path, exc) from exc

    def _process(self, data: bytes) -> bool:
        digest = hashlib.sha256(data).hexdigest()
        if digest == self._last_digest:
            return self._recover()
        try:
            decoded = decode_snapshot_json(data, tz=self.tz)
        except SnapshotDecodeError as exc:
            self._report(exc)
            return False
        self._last_digest = digest
        self._last_decoded = decoded
        self._publish(decoded)
        return True

    def _recover(self) -> bool:
        # The file is back to its last good content after a failure run;
        # republish so subscribers see the run end.
        if not self._failing or self._last_decoded is None:
            return False
        self._publish(self._last_decoded)
        return True

    def _publish(self, decoded: DecodedSnapshot) -> None:
        self._failing = False
        snapshot = self.channel.publish(decoded)
        self._events.log_snapshot_published(snapshot)

    def _report(self, error: BaseException) -> None:
        # Subscribers own the failure log line.
        self._failing = True
        self.channel.report_error(error)

    async def _tick_async(self) -> bool:
        """Async variant of :meth:`tick`, offloading file reads to a thread."""
        try:
            data = await asyncio.to_thread(self._read)
        except SnapshotSourceError as exc:
            self._report(exc)
            return False
        return self._process(data)
