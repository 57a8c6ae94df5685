"""Structured log events for snapshot delivery and dashboard sessions.

Events are emitted through femtologging as ``[event] key=value`` lines so
log aggregators can parse them without a dedicated metrics backend.
"""

from __future__ import annotations

import enum
import typing as typ

from hookboard.events.errors import MalformedTimestampError, SnapshotDecodeError
from hookboard.logging import get_logger, log_error, log_info, log_warning

from .errors import SnapshotSourceError

if typ.TYPE_CHECKING:
    from hookboard.dashboard.engine import DashboardBundle

    from .channel import Snapshot

logger = get_logger(__name__)


class StreamEventType(enum.StrEnum):
    """Structured log event names."""

    SNAPSHOT_PUBLISHED = "snapshot.published"
    SNAPSHOT_DOCUMENTS_SKIPPED = "snapshot.documents.skipped"
    SOURCE_FAILED = "source.failed"
    SESSION_RECOMPUTED = "session.recomputed"
    SESSION_RECOVERED = "session.recovered"


class ErrorCategory(enum.StrEnum):
    """Categories for snapshot failures."""

    SOURCE_IO = "source_io"
    MALFORMED_TIMESTAMP = "malformed_timestamp"
    DECODE = "decode"
    UNKNOWN = "unknown"


_EXCEPTION_CATEGORY_MAP: tuple[tuple[type[BaseException], ErrorCategory], ...] = (
    (SnapshotSourceError, ErrorCategory.SOURCE_IO),
    (OSError, ErrorCategory.SOURCE_IO),
    (MalformedTimestampError, ErrorCategory.MALFORMED_TIMESTAMP),
    (SnapshotDecodeError, ErrorCategory.DECODE),
)


def categorize_error(exc: BaseException) -> ErrorCategory:
    """Categorize a snapshot failure for alert routing."""
    for exc_type, category in _EXCEPTION_CATEGORY_MAP:
        if isinstance(exc, exc_type):
            return category
    return ErrorCategory.UNKNOWN


class SnapshotEventLogger:
    """Emit structured snapshot and session events."""

    def __init__(self, source: str) -> None:
        """Tag every event with the name of the snapshot source."""
        self.source = source

    def log_snapshot_published(self, snapshot: Snapshot) -> None:
        """Log a newly published snapshot."""
        log_info(
            logger,
            "[%s] source=%s version=%d events=%d skipped_documents=%d",
            StreamEventType.SNAPSHOT_PUBLISHED,
            self.source,
            snapshot.version,
            len(snapshot.events),
            snapshot.skipped_documents,
        )
        if snapshot.skipped_documents:
            log_warning(
                logger,
                "[%s] source=%s version=%d skipped_documents=%d",
                StreamEventType.SNAPSHOT_DOCUMENTS_SKIPPED,
                self.source,
                snapshot.version,
                snapshot.skipped_documents,
            )

    def log_source_failed(self, error: BaseException) -> None:
        """Log a failed snapshot fetch with its category."""
        log_error(
            logger,
            "[%s] source=%s error_type=%s error_category=%s error_message=%s",
            StreamEventType.SOURCE_FAILED,
            self.source,
            type(error).__name__,
            categorize_error(error),
            str(error),
            exc_info=error,
        )

    def log_session_recomputed(self, version: int, bundle: DashboardBundle) -> None:
        """Log a dashboard recomputation."""
        log_info(
            logger,
            "[%s] source=%s version=%d time_range=%s repository=%s "
            "total_events=%d page=%d total_pages=%d",
            StreamEventType.SESSION_RECOMPUTED,
            self.source,
            version,
            bundle.filters.time_range,
            bundle.filters.repository,
            bundle.total_events,
            bundle.page.current_page,
            bundle.page.total_pages,
        )

    def log_session_recovered(self, version: int) -> None:
        """Log the first good snapshot after a failure run."""
        log_info(
            logger,
            "[%s] source=%s version=%d",
            StreamEventType.SESSION_RECOVERED,
            self.source,
            version,
        )
