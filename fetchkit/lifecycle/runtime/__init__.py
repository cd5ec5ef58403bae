"""Runtime components: completion primitives and fetch state machines."""

from .fetcher import Fetcher
from .list_fetcher import ListFetcher
from .promise import CancellablePromise, CancellableSignal, TimeoutPromise

__all__ = [
    "CancellableSignal",
    "CancellablePromise",
    "TimeoutPromise",
    "Fetcher",
    "ListFetcher",
]
