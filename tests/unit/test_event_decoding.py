"""Unit tests for decoding raw webhook documents."""

from __future__ import annotations

import datetime as dt

import msgspec
import pytest

from hookboard.events import (
    UNKNOWN_LABEL,
    MalformedTimestampError,
    SnapshotDecodeError,
    decode_document,
    decode_documents,
    decode_snapshot_json,
    parse_received_at,
)
from tests.helpers.webhook_documents import TEST_TZ, webhook_document


class TestParseReceivedAt:
    """receivedAt accepts every shape the event store emits."""

    def test_iso_string_with_offset(self) -> None:
        """Offsets in ISO strings are honoured."""
        parsed = parse_received_at("2024-07-01T10:00:00Z", TEST_TZ)
        assert parsed == dt.datetime(2024, 7, 1, 10, 0, tzinfo=dt.UTC)

    def test_naive_iso_string_uses_dashboard_zone(self) -> None:
        """Strings without an offset are read in the dashboard zone."""
        parsed = parse_received_at("2024-07-01T10:00:00", TEST_TZ)
        assert parsed == dt.datetime(2024, 7, 1, 8, 0, tzinfo=dt.UTC)

    def test_epoch_milliseconds(self) -> None:
        """Numbers are epoch milliseconds."""
        parsed = parse_received_at(1_720_000_000_500, TEST_TZ)
        expected = dt.datetime.fromtimestamp(1_720_000_000.5, tz=dt.UTC)
        assert parsed == expected

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param({"seconds": 1_720_000_000, "nanoseconds": 250_000_000}),
            pytest.param(
                {"_seconds": 1_720_000_000, "_nanoseconds": 250_000_000},
                id="admin-sdk",
            ),
        ],
    )
    def test_store_timestamp_mapping(self, value: dict[str, int]) -> None:
        """Store timestamps combine seconds and nanoseconds."""
        parsed = parse_received_at(value, TEST_TZ)
        expected = dt.datetime.fromtimestamp(1_720_000_000, tz=dt.UTC)
        assert parsed == expected + dt.timedelta(milliseconds=250)

    def test_naive_datetime_uses_dashboard_zone(self) -> None:
        """Naive datetimes take the dashboard zone."""
        naive = dt.datetime(2024, 7, 1, 10, 0)  # noqa: DTZ001
        assert parse_received_at(naive, TEST_TZ).tzinfo is TEST_TZ

    def test_missing_value(self) -> None:
        """A missing value is reported as such."""
        with pytest.raises(MalformedTimestampError, match="missing"):
            parse_received_at(None, TEST_TZ)

    @pytest.mark.parametrize(
        "value",
        [
            pytest.param("yesterday", id="prose"),
            pytest.param("", id="empty"),
            pytest.param("   ", id="blank"),
            pytest.param(True, id="bool"),
            pytest.param([2024, 7, 1], id="list"),
            pytest.param({"seconds": "1720000000"}, id="string-seconds"),
            pytest.param({"nanoseconds": 5}, id="no-seconds"),
            pytest.param(10**20, id="out-of-range"),
        ],
    )
    def test_unparseable_values(self, value: object) -> None:
        """Values that are not timestamps are rejected."""
        with pytest.raises(MalformedTimestampError, match="not a valid timestamp"):
            parse_received_at(value, TEST_TZ)

    def test_long_values_are_truncated_in_message(self) -> None:
        """Error messages preview at most a short prefix of the raw value."""
        with pytest.raises(MalformedTimestampError) as excinfo:
            parse_received_at("x" * 500, TEST_TZ)
        assert "..." in str(excinfo.value)
        assert "x" * 100 not in str(excinfo.value)


class TestDecodeDocument:
    """Normalisation of a single webhook document."""

    def test_full_document(self) -> None:
        """All present fields are carried into the event record."""
        event = decode_document(
            webhook_document(
                "abc",
                "2024-07-01T10:00:00Z",
                github_event="pull_request",
                repository="team-web",
                sender="alice",
            ),
            tz=TEST_TZ,
        )

        assert event.id == "abc"
        assert event.event_type == "pull_request"
        assert event.repository_name == "team-web"
        assert event.actor == "alice"

    def test_absent_fields_default_to_unknown(self) -> None:
        """Missing event type and actor become Unknown; repository stays None."""
        event = decode_document(
            {"id": "bare", "receivedAt": "2024-07-01T10:00:00Z"}, tz=TEST_TZ
        )

        assert event.event_type == UNKNOWN_LABEL
        assert event.actor == UNKNOWN_LABEL
        assert event.repository_name is None
        assert event.repository_label == UNKNOWN_LABEL

    def test_empty_repository_name_is_absent(self) -> None:
        """An empty repository name is treated like a missing one."""
        raw = webhook_document("a", "2024-07-01T10:00:00Z", repository="")
        assert decode_document(raw, tz=TEST_TZ).repository_name is None

    @pytest.mark.parametrize(
        ("sender", "pusher", "pr_author", "expected"),
        [
            pytest.param("alice", "bob", "carol", "alice", id="sender-wins"),
            pytest.param(None, "bob", "carol", "bob", id="pusher-next"),
            pytest.param(None, None, "carol", "carol", id="pr-author-last"),
            pytest.param("", "bob", None, "bob", id="empty-sender-skipped"),
            pytest.param(None, None, None, UNKNOWN_LABEL, id="nobody"),
        ],
    )
    def test_actor_priority(
        self,
        sender: str | None,
        pusher: str | None,
        pr_author: str | None,
        expected: str,
    ) -> None:
        """Actor is the sender, then the pusher, then the PR author."""
        raw = webhook_document(
            "a",
            "2024-07-01T10:00:00Z",
            sender=sender,
            pusher=pusher,
            pr_author=pr_author,
        )
        assert decode_document(raw, tz=TEST_TZ).actor == expected

    def test_numeric_id_is_stringified(self) -> None:
        """Numeric ids are kept as their decimal string."""
        raw = webhook_document(None, "2024-07-01T10:00:00Z")
        raw["id"] = 42
        assert decode_document(raw, tz=TEST_TZ).id == "42"

    def test_missing_id_uses_position(self) -> None:
        """Documents without an id are identified by snapshot position."""
        raw = webhook_document(None, "2024-07-01T10:00:00Z")
        assert decode_document(raw, tz=TEST_TZ, position=7).id == "#7"

    def test_unknown_fields_are_ignored(self) -> None:
        """Extra webhook payload fields do not affect decoding."""
        raw = webhook_document("a", "2024-07-01T10:00:00Z")
        raw["headers"] = {"x-github-delivery": "123"}
        raw["commits"] = [{"id": "deadbeef"}]
        assert decode_document(raw, tz=TEST_TZ).id == "a"

    def test_wrongly_typed_block_is_rejected(self) -> None:
        """A repository that is not an object is a shape error."""
        raw = webhook_document("a", "2024-07-01T10:00:00Z", repository=None)
        raw["repository"] = "team-api"
        with pytest.raises(SnapshotDecodeError, match="unexpected shape"):
            decode_document(raw, tz=TEST_TZ)

    def test_non_object_is_rejected(self) -> None:
        """Documents must be JSON objects."""
        with pytest.raises(SnapshotDecodeError, match="must be an object"):
            decode_document(["not", "a", "document"], tz=TEST_TZ)

    def test_malformed_timestamp_is_a_decode_error(self) -> None:
        """Timestamp failures are decode failures for skip handling."""
        raw = webhook_document("a", "soon")
        with pytest.raises(SnapshotDecodeError):
            decode_document(raw, tz=TEST_TZ)


class TestDecodeDocuments:
    """Skip-and-count handling across a snapshot."""

    def test_skips_and_records_bad_documents(self) -> None:
        """Bad documents are skipped; good ones keep snapshot order."""
        documents = [
            webhook_document("first", "2024-07-01T10:00:00Z"),
            webhook_document("broken", "not a timestamp"),
            "garbage",
            webhook_document("last", 1_720_000_000_000),
        ]

        decoded = decode_documents(documents, tz=TEST_TZ)

        assert [event.id for event in decoded.events] == ["first", "last"]
        assert decoded.skipped_count == 2
        assert [(r.position, r.document_id) for r in decoded.rejected] == [
            (1, "broken"),
            (2, None),
        ]
        assert "not a valid timestamp" in decoded.rejected[0].reason

    def test_empty_snapshot(self) -> None:
        """An empty snapshot decodes to no events and no rejections."""
        decoded = decode_documents([], tz=TEST_TZ)
        assert decoded.events == ()
        assert decoded.skipped_count == 0


class TestDecodeSnapshotJson:
    """Top-level snapshot payload handling."""

    def test_accepts_bare_list(self) -> None:
        """A JSON array is a list of documents."""
        payload = msgspec.json.encode(
            [webhook_document("a", "2024-07-01T10:00:00Z")]
        )
        assert len(decode_snapshot_json(payload, tz=TEST_TZ).events) == 1

    def test_accepts_documents_envelope(self) -> None:
        """An object with a documents list is unwrapped."""
        payload = msgspec.json.encode(
            {"documents": [webhook_document("a", "2024-07-01T10:00:00Z")]}
        ).decode("utf-8")
        assert len(decode_snapshot_json(payload, tz=TEST_TZ).events) == 1

    def test_rejects_invalid_json(self) -> None:
        """Unparseable payloads fail the whole snapshot."""
        with pytest.raises(SnapshotDecodeError, match="not valid JSON"):
            decode_snapshot_json(b"[{", tz=TEST_TZ)

    @pytest.mark.parametrize(
        "payload",
        [
            pytest.param(b'{"items": []}', id="object-without-documents"),
            pytest.param(b'"documents"', id="string"),
            pytest.param(b'{"documents": {}}', id="documents-not-a-list"),
        ],
    )
    def test_rejects_payload_without_document_list(self, payload: bytes) -> None:
        """Payloads without a document list fail the whole snapshot."""
        with pytest.raises(SnapshotDecodeError, match="list of documents"):
            decode_snapshot_json(payload, tz=TEST_TZ)
