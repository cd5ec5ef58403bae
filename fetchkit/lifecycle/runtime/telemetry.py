"""Structured logging for fetch lifecycle events.

Records use event-name messages with context in ``extra`` so that any
structured handler configured by the application can pick the fields up.
The library itself installs no handlers.
"""

from __future__ import annotations

import logging

logger = logging.getLogger(__name__)


def log_fetch_blocked(*, fetcher: str, reason: str) -> None:
    """Log a fetch refused by the request gate.

    Args:
        fetcher: Fetcher label
        reason: Block reason value (e.g., "concurrent", "exhausted")
    """
    logger.debug("fetch_blocked", extra={"fetcher": fetcher, "reason": reason})


def log_fetch_attempt_started(*, fetcher: str, attempt: int) -> None:
    """Log entry into the pending state.

    Args:
        fetcher: Fetcher label
        attempt: One-based attempt number within the attempt chain
    """
    logger.debug("fetch_attempt_started", extra={"fetcher": fetcher, "attempt": attempt})


def log_fetch_retry_scheduled(
    *,
    fetcher: str,
    retry: int,
    max_retries: int,
    error_type: str,
    error_message: str,
) -> None:
    """Log a failed attempt that will be retried.

    Args:
        fetcher: Fetcher label
        retry: One-based number of the retry about to start
        max_retries: Retry budget of the fetcher
        error_type: Exception class name of the failed attempt
        error_message: Exception message of the failed attempt
    """
    logger.warning(
        "fetch_retry_scheduled",
        extra={
            "fetcher": fetcher,
            "retry": retry,
            "max_retries": max_retries,
            "error_type": error_type,
            "error_message": error_message,
        },
    )


def log_fetch_succeeded(*, fetcher: str, attempts: int, latency_ms: float) -> None:
    logger.debug(
        "fetch_succeeded",
        extra={"fetcher": fetcher, "attempts": attempts, "latency_ms": latency_ms},
    )


def log_fetch_failed(
    *,
    fetcher: str,
    attempts: int,
    error_type: str,
    error_message: str,
    latency_ms: float,
) -> None:
    """Log a terminal failure after the retry budget is exhausted."""
    logger.error(
        "fetch_failed",
        extra={
            "fetcher": fetcher,
            "attempts": attempts,
            "error_type": error_type,
            "error_message": error_message,
            "latency_ms": latency_ms,
        },
    )


def log_fetch_timed_out(*, fetcher: str, timeout_ms: float) -> None:
    logger.warning("fetch_timed_out", extra={"fetcher": fetcher, "timeout_ms": timeout_ms})
