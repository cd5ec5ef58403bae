"""Unit tests for lifecycle events."""

from dataclasses import FrozenInstanceError

import pytest

from fetchkit.lifecycle.core import Status
from fetchkit.lifecycle.models import ChangeEvent, CompleteEvent


def test_change_event_constructors():
    error = RuntimeError("boom")

    assert ChangeEvent.pending() == ChangeEvent(status=Status.PENDING, payload=None)
    assert ChangeEvent.success("data").payload == "data"
    assert ChangeEvent.failure(error) == ChangeEvent(status=Status.FAILURE, payload=error)


def test_events_are_frozen():
    event = CompleteEvent(ok=True, payload=1)
    with pytest.raises(FrozenInstanceError):
        event.ok = False


def test_status_values():
    assert Status.PENDING.value == "pending"
    assert Status("success") is Status.SUCCESS
