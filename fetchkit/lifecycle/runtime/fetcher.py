"""Request lifecycle state machine.

Architecture:
    ``Fetcher.fetch()`` runs one attempt chain for a caller-supplied request:

        gate -> pending -> request -> pipe -> success
                              |
                              +-> failure -> (retry -> pending) | terminal failure

    The whole chain is raced against a single ``TimeoutPromise``. Gate and the
    first pending transition run synchronously inside ``fetch()``; everything
    after that runs in one task driving an explicit retry loop.

Ordering:
    Within a transition the order is fixed: state mutation, extension hook
    (``handle_success``/``handle_failure``), public hook, ``on_change``,
    ``on_complete``. Hooks therefore always observe post-transition state.

Timeouts:
    A deadline only settles the caller's future. The request chain keeps
    running and still updates state and fires its hooks when it settles.

Extension Points:
    Subclasses override ``blocked_reason``, ``handle_success`` and
    ``handle_failure``. See ``ListFetcher``.
"""

from __future__ import annotations

import asyncio
from time import perf_counter
from typing import Any

from ..core.enums import BlockReason
from ..core.exceptions import GateBlockedError, TimeoutExceededError
from ..models.events import ChangeEvent, CompleteEvent
from ..models.options import FetcherOptions
from .promise import TimeoutPromise
from .telemetry import (
    log_fetch_attempt_started,
    log_fetch_blocked,
    log_fetch_failed,
    log_fetch_retry_scheduled,
    log_fetch_succeeded,
    log_fetch_timed_out,
)


class Fetcher:
    """Manages pending/success/failure state of one asynchronous request."""

    def __init__(self, options: FetcherOptions | None = None, /, **kwargs: Any) -> None:
        """Initialize fetcher.

        Args:
            options: Prebuilt options record
            **kwargs: Option fields, used when no record is given

        Raises:
            ValueError: If both an options record and keyword options are given
            pydantic.ValidationError: If keyword options are invalid
        """
        if options is not None and kwargs:
            raise ValueError("Pass either an options record or keyword options, not both")
        self.options = options if options is not None else self._build_options(**kwargs)

        self._fetching = False
        self._fetched = False
        self._data: Any = None
        self._error: BaseException | None = None
        self._retry_times = 0

    @classmethod
    def _build_options(cls, **kwargs: Any) -> FetcherOptions:
        return FetcherOptions(**kwargs)

    # ----------------------
    # Observable state
    # ----------------------
    @property
    def name(self) -> str:
        return self.options.name or type(self).__name__

    @property
    def fetching(self) -> bool:
        return self._fetching

    @property
    def fetched(self) -> bool:
        return self._fetched

    @property
    def data(self) -> Any:
        return self._data

    @property
    def error(self) -> BaseException | None:
        return self._error

    @property
    def retry_times(self) -> int:
        return self._retry_times

    # ----------------------
    # Configuration (writes are validated by the options record)
    # ----------------------
    @property
    def concurrent(self) -> bool:
        return self.options.concurrent

    @concurrent.setter
    def concurrent(self, value: bool) -> None:
        self.options.concurrent = value

    @property
    def timeout_ms(self) -> float:
        return self.options.timeout_ms

    @timeout_ms.setter
    def timeout_ms(self, value: float) -> None:
        self.options.timeout_ms = value

    @property
    def max_retry_times(self) -> int:
        return self.options.max_retry_times

    @max_retry_times.setter
    def max_retry_times(self, value: int) -> None:
        self.options.max_retry_times = value

    # ----------------------
    # Extension points
    # ----------------------
    def blocked_reason(self) -> BlockReason | None:
        """Return why a new fetch may not start, or None to let it through."""
        if not self.concurrent and self._fetching:
            return BlockReason.CONCURRENT
        return None

    def handle_success(self, response: Any) -> None:
        """Called with the raw response after success state is recorded."""

    def handle_failure(self, error: BaseException) -> None:
        """Called with the terminal error after failure state is recorded."""

    # ----------------------
    # Lifecycle
    # ----------------------
    def fetch(self) -> asyncio.Future[Any]:
        """Start an attempt chain.

        Must be called while an event loop is running. The gate and the
        pending transition happen before this method returns.

        Returns:
            Future resolving with the piped response. It fails with the
            request's own exception once retries are exhausted, with
            ``GateBlockedError`` if the gate refused the call, or with
            ``TimeoutExceededError`` if the deadline elapsed first.

            A blocked future is marked retrieved, so discarding it logs
            nothing.

        Raises:
            Exception: Whatever ``on_pending`` or ``on_change`` raised while
                entering pending. ``fetching`` is reset first.
        """
        loop = asyncio.get_running_loop()

        reason = self.blocked_reason()
        if reason is not None:
            log_fetch_blocked(fetcher=self.name, reason=reason.value)
            blocked = loop.create_future()
            blocked.set_exception(GateBlockedError(reason))
            blocked.exception()
            return blocked

        self._retry_times = 0
        self._enter_pending(attempt=1)

        chain = asyncio.ensure_future(self._run_attempts())
        deadline = TimeoutPromise.from_awaitable(chain, self.timeout_ms)
        return deadline.catch(self._on_deadline_error)

    async def _run_attempts(self) -> Any:
        started = perf_counter()
        retries = 0

        while True:
            try:
                response = await self.options.request()
                piped = self._pipe(response)
            except asyncio.CancelledError:
                self._fetching = False
                raise
            except Exception as e:
                if retries < self.max_retry_times:
                    retries += 1
                    self._retry_times = retries
                    self._fetching = False
                    log_fetch_retry_scheduled(
                        fetcher=self.name,
                        retry=retries,
                        max_retries=self.max_retry_times,
                        error_type=type(e).__name__,
                        error_message=str(e),
                    )
                    self._enter_pending(attempt=retries + 1)
                    continue

                log_fetch_failed(
                    fetcher=self.name,
                    attempts=retries + 1,
                    error_type=type(e).__name__,
                    error_message=str(e),
                    latency_ms=(perf_counter() - started) * 1000.0,
                )
                self._settle_failure(e)
                raise

            log_fetch_succeeded(
                fetcher=self.name,
                attempts=retries + 1,
                latency_ms=(perf_counter() - started) * 1000.0,
            )
            return self._settle_success(response, piped)

    def _pipe(self, response: Any) -> Any:
        pipe = self.options.response_pipe
        if pipe is None:
            return response
        return pipe(self, response)

    def _call(self, hook: Any, *args: Any) -> None:
        if hook is not None:
            hook(self, *args)

    def _enter_pending(self, *, attempt: int) -> None:
        self._fetching = True
        log_fetch_attempt_started(fetcher=self.name, attempt=attempt)

        try:
            self._call(self.options.on_pending)
            self._call(self.options.on_change, ChangeEvent.pending())
        except BaseException:
            self._fetching = False
            raise

    def _settle_success(self, response: Any, piped: Any) -> Any:
        self._fetching = False
        self._fetched = True
        self._data = piped

        self.handle_success(response)

        self._call(self.options.on_success, piped)
        self._call(self.options.on_change, ChangeEvent.success(piped))
        self._call(self.options.on_complete, CompleteEvent(ok=True, payload=piped))
        return piped

    def _settle_failure(self, error: BaseException) -> None:
        self._fetching = False
        self._error = error

        self.handle_failure(error)

        self._call(self.options.on_failure, error)
        self._call(self.options.on_change, ChangeEvent.failure(error))
        self._call(self.options.on_complete, CompleteEvent(ok=False, payload=error))

    def _on_deadline_error(self, error: BaseException) -> Any:
        if isinstance(error, TimeoutExceededError):
            log_fetch_timed_out(fetcher=self.name, timeout_ms=error.timeout_ms)
            try:
                self._call(self.options.on_timeout)
            except Exception as hook_error:
                raise error from hook_error
        raise error
