"""Custom exception hierarchy."""

from __future__ import annotations

from .enums import BlockReason


class FetchError(Exception):
    """Base exception for all library errors."""

    pass


class GateBlockedError(FetchError):
    """Fetch refused by the request gate before anything started.

    Raised instead of starting a request when the concurrency policy or a
    subclass condition (such as pagination exhaustion) blocks the call.
    No state is mutated and no hooks fire.
    """

    def __init__(self, reason: BlockReason, message: str | None = None) -> None:
        super().__init__(message or f"blocked by request gate ({reason.value})")
        self.reason = reason


class CancellationError(FetchError):
    """Outcome cancelled through ``CancellablePromise.cancel()``."""

    def __init__(self, message: str = "CancellationError") -> None:
        super().__init__(message)


class TimeoutExceededError(CancellationError, TimeoutError):
    """Deadline elapsed before the outcome settled."""

    def __init__(self, timeout_ms: float, message: str | None = None) -> None:
        super().__init__(message or f"timed out after {timeout_ms:g} ms")
        self.timeout_ms = timeout_ms
