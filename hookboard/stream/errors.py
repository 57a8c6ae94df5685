"""Errors raised by snapshot sources and channels."""

from __future__ import annotations

import typing as typ

from hookboard.errors import HookboardError

if typ.TYPE_CHECKING:
    from pathlib import Path


class SnapshotSourceError(HookboardError, RuntimeError):
    """Raised when a snapshot source cannot read its backing store."""

    def __init__(self, message: str, *, location: str | None = None) -> None:
        """Initialise with a message and the location that failed."""
        self.location = location
        super().__init__(message)

    @classmethod
    def unreadable(cls, path: Path, exc: OSError) -> SnapshotSourceError:
        """Return an error for snapshot files that cannot be read."""
        return cls(f"cannot read snapshot file {path}: {exc}", location=str(path))


class SnapshotChannelClosedError(HookboardError, RuntimeError):
    """Raised when publishing to or subscribing on a closed channel."""

    def __init__(self) -> None:
        """Use a fixed message for closed-channel operations."""
        super().__init__("snapshot channel is closed")
