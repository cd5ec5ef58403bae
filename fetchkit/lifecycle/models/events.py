"""Lifecycle events passed to ``on_change`` and ``on_complete`` hooks."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from ..core.enums import Status


@dataclass(frozen=True)
class ChangeEvent:
    """Status transition of a fetcher.

    ``payload`` is the piped response for SUCCESS, the terminal error for
    FAILURE and ``None`` for PENDING.
    """

    status: Status
    payload: Any = None

    @classmethod
    def pending(cls) -> ChangeEvent:
        return cls(status=Status.PENDING)

    @classmethod
    def success(cls, payload: Any) -> ChangeEvent:
        return cls(status=Status.SUCCESS, payload=payload)

    @classmethod
    def failure(cls, error: BaseException) -> ChangeEvent:
        return cls(status=Status.FAILURE, payload=error)


@dataclass(frozen=True)
class CompleteEvent:
    """Terminal outcome of an attempt chain."""

    ok: bool
    payload: Any = None
