"""aiohttp glue for building fetcher requests."""

from collections.abc import Awaitable, Callable
from typing import Any, Dict, Optional

import aiohttp


def request_for(
    session: aiohttp.ClientSession,
    url: str,
    *,
    method: str = "GET",
    params: Optional[Dict[str, Any]] = None,
    headers: Optional[Dict[str, str]] = None,
) -> Callable[[], Awaitable[Any]]:
    """Bind an HTTP call into a zero-argument request for ``FetcherOptions.request``.

    The session stays owned by the caller. The response body is decoded as
    JSON, and an error status raises ``aiohttp.ClientResponseError`` so the
    fetcher treats it as a failed attempt.

    ``params`` is read at call time, so a caller may mutate the dict between
    fetches (e.g. to advance a page cursor).
    """

    async def request() -> Any:
        async with session.request(method, url, params=params, headers=headers) as response:
            response.raise_for_status()
            return await response.json()

    return request
