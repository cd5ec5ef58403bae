"""Unit tests for ListFetcher pagination."""

from __future__ import annotations

import asyncio
from unittest.mock import MagicMock

import pytest

from fetchkit.lifecycle import (
    BlockReason,
    FetcherOptions,
    GateBlockedError,
    ListFetcher,
    ListFetcherOptions,
)


def make_counter_request():
    """Request returning one element per call: [0], [1], [2], ..."""
    count = 0

    async def request() -> list[int]:
        nonlocal count
        await asyncio.sleep(0)
        page = [count]
        count += 1
        return page

    return request


def concat(fetcher, page):
    return [*(fetcher.data or []), *page]


@pytest.mark.asyncio
async def test_page_number_and_has_more():
    on_success = MagicMock()
    fetcher = ListFetcher(
        request=make_counter_request(),
        is_there_more=lambda page: page[-1] < 2,
        response_pipe=concat,
        on_success=on_success,
    )

    assert fetcher.has_more is True
    assert fetcher.page == 1
    assert fetcher.data is None

    await fetcher.fetch()
    assert fetcher.has_more is True
    assert fetcher.page == 2
    assert fetcher.data == [0]

    await fetcher.fetch()
    assert fetcher.has_more is True
    assert fetcher.page == 3
    assert fetcher.data == [0, 1]

    await fetcher.fetch()
    assert fetcher.has_more is False
    assert fetcher.page == 4
    assert fetcher.data == [0, 1, 2]

    with pytest.raises(GateBlockedError) as exc_info:
        await fetcher.fetch()

    assert exc_info.value.reason is BlockReason.EXHAUSTED
    assert fetcher.page == 4
    assert fetcher.data == [0, 1, 2]
    assert on_success.call_count == 3


@pytest.mark.asyncio
async def test_has_more_uses_raw_response():
    seen = []

    def is_there_more(page):
        seen.append(page)
        return True

    fetcher = ListFetcher(
        request=make_counter_request(),
        is_there_more=is_there_more,
        response_pipe=lambda f, page: {"items": page},
    )
    await fetcher.fetch()

    assert seen == [[0]]
    assert fetcher.data == {"items": [0]}


@pytest.mark.asyncio
async def test_pagination_advanced_before_public_success_hook():
    observed = []
    fetcher = ListFetcher(
        request=make_counter_request(),
        is_there_more=lambda page: False,
        on_success=lambda f, data: observed.append((f.page, f.has_more)),
    )

    await fetcher.fetch()

    assert observed == [(2, False)]


@pytest.mark.asyncio
async def test_failure_does_not_advance_page():
    async def request():
        raise RuntimeError("page unavailable")

    fetcher = ListFetcher(request=request, is_there_more=lambda page: True)

    with pytest.raises(RuntimeError):
        await fetcher.fetch()

    assert fetcher.page == 1
    assert fetcher.has_more is True


@pytest.mark.asyncio
async def test_concurrency_gate_still_applies():
    fetcher = ListFetcher(
        request=make_counter_request(),
        is_there_more=lambda page: True,
        concurrent=False,
    )

    first, second = await asyncio.gather(fetcher.fetch(), fetcher.fetch(), return_exceptions=True)

    assert first == [0]
    assert isinstance(second, GateBlockedError)
    assert second.reason is BlockReason.CONCURRENT
    assert fetcher.page == 2


def test_accepts_list_options_record():
    options = ListFetcherOptions(request=make_counter_request(), is_there_more=lambda page: True)
    fetcher = ListFetcher(options)
    assert fetcher.options is options


def test_rejects_plain_fetcher_options():
    with pytest.raises(TypeError, match="ListFetcherOptions"):
        ListFetcher(FetcherOptions(request=make_counter_request()))
