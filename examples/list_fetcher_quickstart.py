#!/usr/bin/env python3
from __future__ import annotations

import argparse
import asyncio
import logging
import random

from fetchkit.lifecycle import GateBlockedError, ListFetcher, TimeoutExceededError


def parse_args() -> argparse.Namespace:
    p = argparse.ArgumentParser(description="Quickstart for paginated fetching with retry")
    p.add_argument("pages", nargs="?", type=int, default=4, help="Pages available upstream")
    p.add_argument("--page-size", type=int, default=3)
    p.add_argument("--fail-rate", type=float, default=0.3, help="Chance each call fails")
    p.add_argument("--timeout-ms", type=float, default=500)
    p.add_argument("--retries", type=int, default=2)
    p.add_argument("--verbose", action="store_true")
    return p.parse_args()


async def main() -> None:
    args = parse_args()
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    served = 0

    # Fake upstream: flaky, slightly slow, serves `pages` pages then runs dry
    async def load_page() -> list[int]:
        nonlocal served
        await asyncio.sleep(random.uniform(0.01, 0.05))
        if random.random() < args.fail_rate:
            raise ConnectionError("upstream reset")
        start = served * args.page_size
        served += 1
        size = args.page_size if served < args.pages else args.page_size - 1
        return list(range(start, start + size))

    fetcher = ListFetcher(
        request=load_page,
        is_there_more=lambda page: len(page) == args.page_size,
        response_pipe=lambda f, page: [*(f.data or []), *page],
        timeout_ms=args.timeout_ms,
        max_retry_times=args.retries,
        name="numbers",
        on_change=lambda f, evt: print(f"CHANGE {evt.status.value:<8} | page={f.page} fetching={f.fetching}"),
    )

    while True:
        try:
            items = await fetcher.fetch()
        except GateBlockedError as e:
            print(f"DONE {e}")
            break
        except TimeoutExceededError as e:
            print(f"TIMEOUT {e}")
            break
        except ConnectionError as e:
            print(f"FAILED after {fetcher.retry_times} retries: {e}")
            break
        print(f"LOADED {len(items)} items so far, has_more={fetcher.has_more}")

    print("Final:", fetcher.data)


if __name__ == "__main__":
    asyncio.run(main())
