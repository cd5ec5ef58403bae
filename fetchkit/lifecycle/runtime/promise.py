"""Cancellable and deadline-bound completion primitives.

Architecture:
    A ``CancellablePromise`` owns three futures on the running loop:
    - primary: settled by the executor through ``resolve``/``reject``
    - signal: a ``CancellableSignal`` future, settled only by ``cancel()``
    - outcome: settled by whichever of the two settles first
    The outcome is what callers await and chain on. Losing settlements are
    consumed so they never surface as "exception was never retrieved".
    Consumers await the outcome through ``asyncio.shield``, so cancelling a
    waiting task never settles the promise.

    A signal may be created up front and passed to several promises; one
    ``cancel()`` then rejects all of them.

    ``TimeoutPromise`` adds a one-shot loop timer that calls ``cancel()`` with
    a ``TimeoutExceededError``. The timer is released on ``clear()``, on
    settlement through any path, and on exit of ``async with``.

Design Decisions:
    - Continuations (``then``/``catch``/``finally_``) return plain asyncio
      futures; cancelling one promise never propagates down a chain.
    - Executors may be synchronous or return an awaitable, which is scheduled
      as a task and rejects the promise if it raises.
"""

from __future__ import annotations

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any, Generic, TypeVar

from ..core.exceptions import CancellationError, TimeoutExceededError

T = TypeVar("T")

Resolve = Callable[[Any], None]
Reject = Callable[[BaseException], None]
Executor = Callable[[Resolve, Reject], Awaitable[Any] | None]


def _race(outcome: asyncio.Future[Any], *sources: asyncio.Future[Any]) -> None:
    """Settle ``outcome`` with whichever of ``sources`` settles first."""

    def _forward(source: asyncio.Future[Any]) -> None:
        if source.cancelled():
            if not outcome.done():
                outcome.cancel()
            return
        # Always retrieve, so a losing exception is marked as handled
        error = source.exception()
        if outcome.done():
            return
        if error is not None:
            outcome.set_exception(error)
        else:
            outcome.set_result(source.result())

    for source in sources:
        source.add_done_callback(_forward)


class CancellableSignal:
    """Cancellation source that one or more promises race against.

    Must be created while an event loop is running.
    """

    def __init__(self, default_error: BaseException | None = None) -> None:
        self.default_error = default_error
        self.future: asyncio.Future[Any] = asyncio.get_running_loop().create_future()

    @property
    def fired(self) -> bool:
        return self.future.done()

    def cancel(self, reason: BaseException | str | None = None) -> bool:
        """Fire the signal.

        Args:
            reason: Rejection reason. A string is wrapped in
                ``CancellationError``; ``None`` falls back to
                ``default_error``, then to a plain ``CancellationError``.

        Returns:
            True if this call fired the signal, False if it had already fired.
        """
        if self.future.done():
            return False
        if isinstance(reason, str):
            reason = CancellationError(reason)
        if reason is None:
            reason = self.default_error if self.default_error is not None else CancellationError()
        self.future.set_exception(reason)
        # Nothing may be racing this signal yet
        self.future.exception()
        return True


async def _settle(result: Any) -> Any:
    if inspect.isawaitable(result):
        return await result
    return result


async def _continue(
    source: asyncio.Future[Any],
    on_fulfilled: Callable[[Any], Any] | None,
    on_rejected: Callable[[BaseException], Any] | None,
) -> Any:
    try:
        value = await asyncio.shield(source)
    except Exception as error:
        if on_rejected is None:
            raise
        return await _settle(on_rejected(error))
    if on_fulfilled is None:
        return value
    return await _settle(on_fulfilled(value))


async def _finally(source: asyncio.Future[Any], on_finally: Callable[[], Any]) -> Any:
    try:
        return await asyncio.shield(source)
    finally:
        await _settle(on_finally())


class CancellablePromise(Generic[T]):
    """Awaitable that settles once, from its executor or from ``cancel()``.

    Must be created while an event loop is running.
    """

    def __init__(self, executor: Executor, signal: CancellableSignal | None = None) -> None:
        self._loop = asyncio.get_running_loop()
        self._primary: asyncio.Future[T] = self._loop.create_future()
        self._signal = signal if signal is not None else CancellableSignal()
        self._outcome: asyncio.Future[T] = self._loop.create_future()
        self._task: asyncio.Future[Any] | None = None
        _race(self._outcome, self._primary, self._signal.future)

        try:
            pending = executor(self._resolve, self._reject)
        except Exception as e:
            self._reject(e)
            return
        if inspect.isawaitable(pending):
            self._task = asyncio.ensure_future(pending)
            self._task.add_done_callback(self._on_executor_done)

    @classmethod
    def from_awaitable(cls, awaitable: Awaitable[T], *args: Any, **kwargs: Any):
        """Build a promise that settles with the outcome of ``awaitable``."""

        async def executor(resolve: Resolve, reject: Reject) -> None:
            resolve(await awaitable)

        return cls(executor, *args, **kwargs)

    def _resolve(self, value: Any = None) -> None:
        if not self._primary.done():
            self._primary.set_result(value)

    def _reject(self, reason: BaseException) -> None:
        if not self._primary.done():
            self._primary.set_exception(reason)

    def _on_executor_done(self, task: asyncio.Future[Any]) -> None:
        if task.cancelled():
            self._reject(CancellationError("executor task was cancelled"))
            return
        error = task.exception()
        if error is not None:
            self._reject(error)

    def cancel(self, reason: BaseException | str | None = None) -> CancellablePromise[T]:
        """Fire the cancellation signal.

        Rejects with ``reason`` (a string is wrapped in ``CancellationError``)
        or the signal's default error unless the promise already settled.
        Only the first call has any effect. A shared signal rejects every
        promise built on it.

        Returns:
            This promise, for chaining.
        """
        self._signal.cancel(reason)
        return self

    @property
    def signal(self) -> CancellableSignal:
        return self._signal

    def then(
        self,
        on_fulfilled: Callable[[T], Any] | None = None,
        on_rejected: Callable[[BaseException], Any] | None = None,
    ) -> asyncio.Future[Any]:
        return asyncio.ensure_future(_continue(self._outcome, on_fulfilled, on_rejected))

    def catch(self, on_rejected: Callable[[BaseException], Any]) -> asyncio.Future[Any]:
        return self.then(None, on_rejected)

    def finally_(self, on_finally: Callable[[], Any]) -> asyncio.Future[Any]:
        return asyncio.ensure_future(_finally(self._outcome, on_finally))

    def done(self) -> bool:
        return self._outcome.done()

    def result(self) -> T:
        return self._outcome.result()

    def __await__(self):
        return asyncio.shield(self._outcome).__await__()


class TimeoutPromise(CancellablePromise[T]):
    """``CancellablePromise`` that cancels itself once ``timeout_ms`` elapses.

    A ``timeout_ms`` of zero or less arms no timer.
    """

    def __init__(
        self,
        executor: Executor,
        timeout_ms: float = 0,
        signal: CancellableSignal | None = None,
    ) -> None:
        super().__init__(executor, signal)
        self.timeout_ms = timeout_ms
        self._timer: asyncio.TimerHandle | None = None
        if timeout_ms > 0:
            self._timer = self._loop.call_later(timeout_ms / 1000, self._expire)
        self._outcome.add_done_callback(lambda _: self.clear())

    def _expire(self) -> None:
        self._timer = None
        self.cancel(TimeoutExceededError(self.timeout_ms))

    @property
    def armed(self) -> bool:
        """Whether the deadline timer is still pending."""
        return self._timer is not None

    def clear(self) -> TimeoutPromise[T]:
        """Disarm the deadline timer. Safe to call repeatedly."""
        if self._timer is not None:
            self._timer.cancel()
            self._timer = None
        return self

    def finally_(self, on_finally: Callable[[], Any]) -> asyncio.Future[Any]:
        def _clear_first() -> Any:
            self.clear()
            return on_finally()

        return super().finally_(_clear_first)

    async def __aenter__(self) -> TimeoutPromise[T]:
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.clear()
