"""Decode raw webhook snapshots into :class:`EventRecord` values.

Decoding is where the malformed-timestamp policy is applied: documents whose
``receivedAt`` cannot be parsed are skipped, recorded as
:class:`RejectedDocument` entries and logged, while every other document is
normalised with the ``"Unknown"`` defaults. The aggregation engine therefore
only ever sees events with valid, timezone-aware timestamps.

Usage
-----
>>> import datetime as dt
>>> from hookboard.events.decoding import decode_snapshot_json
>>> snapshot = decode_snapshot_json(
...     b'[{"id": "a", "receivedAt": "2024-07-01T10:00:00Z"}]', tz=dt.UTC
... )
>>> snapshot.events[0].event_type
'Unknown'

"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses
import datetime as dt
import typing as typ

import msgspec

from hookboard.common.time import ensure_aware
from hookboard.logging import get_logger, log_debug, log_warning

from .errors import MalformedTimestampError, SnapshotDecodeError
from .models import UNKNOWN_LABEL, EventRecord, WebhookDocument

logger = get_logger(__name__)

_MILLIS_PER_SECOND = 1000
_NANOS_PER_MICRO = 1000


@dataclasses.dataclass(frozen=True, slots=True)
class RejectedDocument:
    """A document the decoder skipped, with the reason it was rejected."""

    position: int
    document_id: str | None
    reason: str


@dataclasses.dataclass(frozen=True, slots=True)
class DecodedSnapshot:
    """Decoded events plus the documents that were skipped."""

    events: tuple[EventRecord, ...] = ()
    rejected: tuple[RejectedDocument, ...] = ()

    @property
    def skipped_count(self) -> int:
        """Return the number of rejected documents."""
        return len(self.rejected)


def _from_epoch_seconds(seconds: float) -> dt.datetime:
    try:
        return dt.datetime.fromtimestamp(seconds, tz=dt.UTC)
    except (OverflowError, OSError, ValueError) as exc:
        raise MalformedTimestampError.unparseable(seconds) from exc


def _parse_iso(value: str, tz: dt.tzinfo) -> dt.datetime:
    text = value.strip()
    if not text:
        raise MalformedTimestampError.unparseable(value)
    try:
        parsed = dt.datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedTimestampError.unparseable(value) from exc
    return ensure_aware(parsed, tz)


def _parse_store_timestamp(value: cabc.Mapping[str, typ.Any]) -> dt.datetime:
    # Firestore serialises timestamps as {seconds, nanoseconds}; the admin SDK
    # prefixes both keys with an underscore.
    seconds = value.get("seconds", value.get("_seconds"))
    nanos = value.get("nanoseconds", value.get("_nanoseconds", 0))
    if not isinstance(seconds, int) or isinstance(seconds, bool):
        raise MalformedTimestampError.unparseable(value)
    if not isinstance(nanos, int) or isinstance(nanos, bool):
        raise MalformedTimestampError.unparseable(value)
    base = _from_epoch_seconds(seconds)
    return base + dt.timedelta(microseconds=nanos // _NANOS_PER_MICRO)


def parse_received_at(value: object, tz: dt.tzinfo) -> dt.datetime:
    """Parse a raw ``receivedAt`` value into an aware datetime.

    Parameters
    ----------
    value
        ISO-8601 string, epoch milliseconds, ``{seconds, nanoseconds}``
        mapping or ``datetime``.
    tz
        Zone applied to naive strings and datetimes.

    Raises
    ------
    MalformedTimestampError
        If the value is missing or cannot be interpreted.

    """
    match value:
        case None:
            raise MalformedTimestampError.missing()
        case dt.datetime():
            return ensure_aware(value, tz)
        case bool():
            raise MalformedTimestampError.unparseable(value)
        case int() | float():
            return _from_epoch_seconds(value / _MILLIS_PER_SECOND)
        case str():
            return _parse_iso(value, tz)
        case cabc.Mapping():
            return _parse_store_timestamp(value)
        case _:
            raise MalformedTimestampError.unparseable(value)


def _first_present(candidates: cabc.Iterable[str | None]) -> str:
    for candidate in candidates:
        if candidate:
            return candidate
    return UNKNOWN_LABEL


def _document_id(raw: object) -> str | None:
    if isinstance(raw, cabc.Mapping):
        value = raw.get("id")
        if value is not None:
            return str(value)
    return None


def decode_document(
    raw: object,
    *,
    tz: dt.tzinfo,
    position: int = 0,
) -> EventRecord:
    """Decode one raw webhook document.

    Documents without an ``id`` are identified by their snapshot position.

    Raises
    ------
    SnapshotDecodeError
        If the document is not an object or has mistyped fields.
    MalformedTimestampError
        If ``receivedAt`` is missing or unparseable.

    """
    if not isinstance(raw, cabc.Mapping):
        raise SnapshotDecodeError.not_an_object(raw)
    try:
        document = msgspec.convert(dict(raw), type=WebhookDocument)
    except msgspec.ValidationError as exc:
        raise SnapshotDecodeError.invalid_shape(exc) from exc

    received_at = parse_received_at(document.received_at, tz)
    repository_name = document.repository.name if document.repository else None
    return EventRecord(
        id=str(document.id) if document.id is not None else f"#{position}",
        received_at=received_at,
        event_type=document.github_event or UNKNOWN_LABEL,
        repository_name=repository_name or None,
        actor=_first_present(document.actor_candidates()),
    )


def decode_documents(
    documents: cabc.Iterable[object],
    *,
    tz: dt.tzinfo,
) -> DecodedSnapshot:
    """Decode every document, skipping and recording the ones that fail."""
    events: list[EventRecord] = []
    rejected: list[RejectedDocument] = []
    for position, raw in enumerate(documents):
        try:
            events.append(decode_document(raw, tz=tz, position=position))
        except SnapshotDecodeError as exc:
            rejection = RejectedDocument(
                position=position,
                document_id=_document_id(raw),
                reason=str(exc),
            )
            rejected.append(rejection)
            log_warning(
                logger,
                "Skipping webhook document at position %d (id=%s): %s",
                position,
                rejection.document_id,
                rejection.reason,
            )
    log_debug(
        logger,
        "Decoded %d webhook documents, skipped %d",
        len(events),
        len(rejected),
    )
    return DecodedSnapshot(events=tuple(events), rejected=tuple(rejected))


def _document_list(payload: object) -> list[object]:
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        documents = payload.get("documents")
        if isinstance(documents, list):
            return documents
    raise SnapshotDecodeError.not_a_list(payload)


def decode_snapshot_json(data: bytes | str, *, tz: dt.tzinfo) -> DecodedSnapshot:
    """Decode a JSON snapshot (a document list or ``{"documents": [...]}``).

    Raises
    ------
    SnapshotDecodeError
        If the payload is not JSON or does not contain a document list.

    """
    try:
        payload = msgspec.json.decode(data)
    except msgspec.DecodeError as exc:
        raise SnapshotDecodeError.invalid_json(exc) from exc
    return decode_documents(_document_list(payload), tz=tz)
