"""fetchkit.lifecycle - request lifecycle controller for asyncio.

Wraps an arbitrary asynchronous request with pending/success/failure state,
response piping, concurrency gating, bounded retry and a cancellable deadline.
"""

from .core import (
    BlockReason,
    CancellationError,
    FetchError,
    GateBlockedError,
    Status,
    TimeoutExceededError,
)
from .models import ChangeEvent, CompleteEvent, FetcherOptions, ListFetcherOptions
from .runtime import (
    CancellablePromise,
    CancellableSignal,
    Fetcher,
    ListFetcher,
    TimeoutPromise,
)
from .utils import request_for

__version__ = "0.1.0"

__all__ = [
    # Core enums
    "Status",
    "BlockReason",
    # Promises
    "CancellableSignal",
    "CancellablePromise",
    "TimeoutPromise",
    # Fetchers
    "Fetcher",
    "ListFetcher",
    # Models
    "FetcherOptions",
    "ListFetcherOptions",
    "ChangeEvent",
    "CompleteEvent",
    # Utils
    "request_for",
    # Exceptions
    "FetchError",
    "GateBlockedError",
    "CancellationError",
    "TimeoutExceededError",
]
