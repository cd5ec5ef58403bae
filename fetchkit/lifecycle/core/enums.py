"""Core enumerations for request lifecycle state.

Key Types:
    - Status: Lifecycle transitions reported through ``on_change``
    - BlockReason: Why the request gate refused to start a fetch
"""

from enum import Enum


class Status(str, Enum):
    """Lifecycle status carried by change events."""

    PENDING = "pending"
    SUCCESS = "success"
    FAILURE = "failure"


class BlockReason(str, Enum):
    """Reason a fetch was refused by the request gate."""

    CONCURRENT = "concurrent"  # another call is in flight and concurrent=False
    EXHAUSTED = "exhausted"  # pagination has no more pages
