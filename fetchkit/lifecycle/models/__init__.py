"""Data models: lifecycle events and fetcher configuration records."""

from .events import ChangeEvent, CompleteEvent
from .options import FetcherOptions, ListFetcherOptions

__all__ = [
    "ChangeEvent",
    "CompleteEvent",
    "FetcherOptions",
    "ListFetcherOptions",
]
