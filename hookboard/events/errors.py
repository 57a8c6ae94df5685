"""Errors raised while decoding webhook snapshots."""

from __future__ import annotations

from hookboard.errors import HookboardError

# Longest raw value echoed back in error messages
_VALUE_PREVIEW_LIMIT = 60


def _preview(value: object) -> str:
    text = repr(value)
    if len(text) > _VALUE_PREVIEW_LIMIT:
        return f"{text[:_VALUE_PREVIEW_LIMIT]}..."
    return text


class SnapshotDecodeError(HookboardError, ValueError):
    """Raised when a snapshot or one of its documents cannot be decoded."""

    @classmethod
    def invalid_json(cls, exc: Exception) -> SnapshotDecodeError:
        """Return an error for snapshot payloads that are not valid JSON."""
        return cls(f"snapshot is not valid JSON: {exc}")

    @classmethod
    def not_a_list(cls, value: object) -> SnapshotDecodeError:
        """Return an error for snapshot payloads without a document list."""
        kind = type(value).__name__
        return cls(
            "snapshot must be a list of documents or an object with a "
            f"'documents' list, got {kind}"
        )

    @classmethod
    def not_an_object(cls, value: object) -> SnapshotDecodeError:
        """Return an error for documents that are not JSON objects."""
        return cls(f"webhook document must be an object, got {type(value).__name__}")

    @classmethod
    def invalid_shape(cls, exc: Exception) -> SnapshotDecodeError:
        """Return an error for documents whose fields have the wrong types."""
        return cls(f"webhook document has an unexpected shape: {exc}")


class MalformedTimestampError(SnapshotDecodeError):
    """Raised when ``receivedAt`` is missing or cannot be parsed."""

    @classmethod
    def missing(cls) -> MalformedTimestampError:
        """Return an error for documents without a ``receivedAt`` value."""
        return cls("receivedAt is missing")

    @classmethod
    def unparseable(cls, value: object) -> MalformedTimestampError:
        """Return an error for ``receivedAt`` values that cannot be parsed."""
        return cls(f"receivedAt {_preview(value)} is not a valid timestamp")
