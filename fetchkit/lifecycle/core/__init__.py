"""Core components."""

from .enums import BlockReason, Status
from .exceptions import (
    CancellationError,
    FetchError,
    GateBlockedError,
    TimeoutExceededError,
)

__all__ = [
    "Status",
    "BlockReason",
    "FetchError",
    "GateBlockedError",
    "CancellationError",
    "TimeoutExceededError",
]
