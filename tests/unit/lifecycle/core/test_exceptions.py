"""Unit tests for exception hierarchy."""

from fetchkit.lifecycle.core import (
    BlockReason,
    CancellationError,
    FetchError,
    GateBlockedError,
    TimeoutExceededError,
)


def test_gate_blocked_error_carries_reason():
    error = GateBlockedError(BlockReason.EXHAUSTED)
    assert error.reason is BlockReason.EXHAUSTED
    assert str(error) == "blocked by request gate (exhausted)"
    assert isinstance(error, FetchError)


def test_cancellation_error_default_message():
    error = CancellationError()
    assert str(error) == "CancellationError"
    assert isinstance(error, FetchError)


def test_timeout_is_a_cancellation():
    error = TimeoutExceededError(50)
    assert error.timeout_ms == 50
    assert str(error) == "timed out after 50 ms"
    assert isinstance(error, CancellationError)
    assert isinstance(error, TimeoutError)
    assert not isinstance(CancellationError(), TimeoutError)
