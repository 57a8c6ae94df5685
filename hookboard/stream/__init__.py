"""Snapshot delivery: channel, polling source and dashboard session."""

from __future__ import annotations

from .channel import Snapshot, SnapshotChannel, Subscription
from .errors import SnapshotChannelClosedError, SnapshotSourceError
from .observability import (
    ErrorCategory,
    SnapshotEventLogger,
    StreamEventType,
    categorize_error,
)
from .session import DashboardSession
from .source import SnapshotFileSource

__all__ = [
    "DashboardSession",
    "ErrorCategory",
    "Snapshot",
    "SnapshotChannel",
    "SnapshotChannelClosedError",
    "SnapshotEventLogger",
    "SnapshotFileSource",
    "SnapshotSourceError",
    "StreamEventType",
    "Subscription",
    "categorize_error",
]
