"""Configuration records for fetchers.

Architecture:
    Options are Pydantic v2 models validated and defaulted once at
    construction. Assignment is re-validated, so a fetcher's configuration
    can be changed after construction without bypassing the rules below.

Hook Contract:
    Every hook, and the response pipe, receives the owning fetcher as its
    first positional argument so it can read public state (``fetching``,
    ``fetched``, ``data``, ``error``, ...). Hooks are called synchronously.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

Request = Callable[[], Awaitable[Any]]
Hook = Callable[..., Any]


class FetcherOptions(BaseModel):
    """Options for a ``Fetcher``."""

    request: Request
    concurrent: bool = True
    timeout_ms: float = 0  # <= 0 disables the deadline
    max_retry_times: int = Field(0, ge=0)
    response_pipe: Hook | None = None
    name: str | None = None

    on_pending: Hook | None = None
    on_success: Hook | None = None
    on_failure: Hook | None = None
    on_complete: Hook | None = None
    on_change: Hook | None = None
    on_timeout: Hook | None = None

    model_config = ConfigDict(validate_assignment=True, extra="forbid")


class ListFetcherOptions(FetcherOptions):
    """Options for a ``ListFetcher``.

    ``is_there_more`` receives the raw (un-piped) response of each successful
    attempt and decides whether another page may be fetched.
    """

    is_there_more: Callable[[Any], bool]
