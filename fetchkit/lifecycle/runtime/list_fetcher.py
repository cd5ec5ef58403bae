"""Paginated fetcher.

``ListFetcher`` tracks the current page and whether more pages exist. It
extends the base state machine only through its extension points: the
success hook advances pagination and the gate refuses calls once the list
is exhausted. Accumulating pages into ``data`` is left to the caller's
response pipe, e.g.::

    ListFetcher(
        request=load_next_page,
        is_there_more=lambda page: len(page) == PAGE_SIZE,
        response_pipe=lambda fetcher, page: [*(fetcher.data or []), *page],
    )
"""

from __future__ import annotations

from typing import Any

from ..core.enums import BlockReason
from ..models.options import ListFetcherOptions
from .fetcher import Fetcher


class ListFetcher(Fetcher):
    """Fetcher with page bookkeeping."""

    options: ListFetcherOptions

    def __init__(self, options: ListFetcherOptions | None = None, /, **kwargs: Any) -> None:
        if options is not None and not isinstance(options, ListFetcherOptions):
            raise TypeError("ListFetcher requires ListFetcherOptions")
        super().__init__(options, **kwargs)
        self._page = 1
        self._has_more = True

    @classmethod
    def _build_options(cls, **kwargs: Any) -> ListFetcherOptions:
        return ListFetcherOptions(**kwargs)

    @property
    def page(self) -> int:
        """Page the next fetch will load, starting at 1."""
        return self._page

    @property
    def has_more(self) -> bool:
        return self._has_more

    def handle_success(self, response: Any) -> None:
        super().handle_success(response)
        self._page += 1
        # Evaluated on the raw response, before the pipe
        self._has_more = bool(self.options.is_there_more(response))

    def blocked_reason(self) -> BlockReason | None:
        reason = super().blocked_reason()
        if reason is None and not self._has_more:
            return BlockReason.EXHAUSTED
        return reason
