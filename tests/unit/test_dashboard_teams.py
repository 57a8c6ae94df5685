"""Unit tests for team labels derived from repository names."""

from __future__ import annotations

import pytest

from hookboard.dashboard import DashboardConfigError, TeamLabeler
from hookboard.events.models import UNKNOWN_LABEL
from tests.helpers.webhook_documents import TEST_NOW, event_record


@pytest.mark.parametrize(
    ("repository", "expected"),
    [
        pytest.param("teamA-svc", "svc", id="simple"),
        pytest.param("team-api-gateway", "api-gateway", id="first-separator"),
        pytest.param("monolith", UNKNOWN_LABEL, id="no-separator"),
        pytest.param("trailing-", UNKNOWN_LABEL, id="empty-team"),
        pytest.param("", UNKNOWN_LABEL, id="empty-name"),
        pytest.param(None, UNKNOWN_LABEL, id="absent"),
        pytest.param(UNKNOWN_LABEL, UNKNOWN_LABEL, id="unknown-repository"),
    ],
)
def test_separator_labels(repository: str | None, expected: str) -> None:
    """The default labeler takes everything after the first hyphen."""
    assert TeamLabeler().label_for(repository) == expected


def test_custom_separator() -> None:
    """Any non-empty separator can be configured."""
    labeler = TeamLabeler(separator="__")
    assert labeler.label_for("org__payments") == "payments"
    assert labeler.label_for("org-payments") == UNKNOWN_LABEL


@pytest.mark.parametrize(
    ("repository", "expected"),
    [
        pytest.param("team-svc", "svc", id="five-char-prefix"),
        pytest.param("teamA-svc", "-svc", id="positional-cut"),
        pytest.param("teamB", UNKNOWN_LABEL, id="exactly-prefix"),
        pytest.param("abc", UNKNOWN_LABEL, id="shorter-than-prefix"),
    ],
)
def test_prefix_length_labels(repository: str, expected: str) -> None:
    """A configured prefix length drops that many leading characters."""
    assert TeamLabeler(prefix_length=5).label_for(repository) == expected


def test_labeler_is_a_categorizer() -> None:
    """Calling the labeler with an event labels its repository."""
    event = event_record("e", TEST_NOW, repository="platform-infra")
    assert TeamLabeler()(event) == "infra"


@pytest.mark.parametrize(
    "kwargs",
    [
        pytest.param({"separator": ""}, id="empty-separator"),
        pytest.param({"prefix_length": 0}, id="zero-prefix"),
        pytest.param({"prefix_length": -3}, id="negative-prefix"),
    ],
)
def test_invalid_settings_are_rejected(kwargs: dict[str, object]) -> None:
    """Settings that cannot produce a label fail at construction."""
    with pytest.raises(DashboardConfigError):
        TeamLabeler(**kwargs)  # type: ignore[arg-type]
