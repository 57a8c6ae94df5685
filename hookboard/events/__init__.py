"""Webhook event models and snapshot decoding."""

from __future__ import annotations

from .decoding import (
    DecodedSnapshot,
    RejectedDocument,
    decode_document,
    decode_documents,
    decode_snapshot_json,
    parse_received_at,
)
from .errors import MalformedTimestampError, SnapshotDecodeError
from .models import UNKNOWN_LABEL, EventRecord, WebhookDocument

__all__ = [
    "UNKNOWN_LABEL",
    "DecodedSnapshot",
    "EventRecord",
    "MalformedTimestampError",
    "RejectedDocument",
    "SnapshotDecodeError",
    "WebhookDocument",
    "decode_document",
    "decode_documents",
    "decode_snapshot_json",
    "parse_received_at",
]
