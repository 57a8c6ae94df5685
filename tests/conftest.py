"""Shared fixtures for unit and feature tests."""

from __future__ import annotations

import typing as typ

import pytest

from tests.helpers.webhook_documents import (
    TEST_NOW,
    TEST_TZ,
    sample_events,
)

if typ.TYPE_CHECKING:
    import datetime as dt

    from hookboard.events.models import EventRecord


@pytest.fixture
def tz() -> dt.tzinfo:
    """Return the fixed-offset zone the tests aggregate in."""
    return TEST_TZ


@pytest.fixture
def now() -> dt.datetime:
    """Return the frozen clock reading used by aggregation tests."""
    return TEST_NOW


@pytest.fixture
def events() -> tuple[EventRecord, ...]:
    """Return the mixed sample snapshot."""
    return sample_events()
