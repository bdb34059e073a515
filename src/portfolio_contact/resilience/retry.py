"""Resilient API call decorator built on tenacity.

Retries a failing call with exponential backoff and jitter, logs a warning
before each retry and an error once the retry budget is exhausted, then
re-raises the original exception so callers keep their own failure policy.
"""

from __future__ import annotations

from collections.abc import Callable
from typing import Any, NoReturn, TypeVar

import structlog
from tenacity import (
    RetryCallState,
    retry,
    stop_after_attempt,
    wait_exponential_jitter,
)

logger = structlog.get_logger()

F = TypeVar("F", bound=Callable[..., Any])


def log_final_failure(retry_state: RetryCallState) -> NoReturn:
    """Log retry exhaustion and re-raise the last exception.

    Args:
        retry_state: Tenacity retry state with attempt info and exception.

    Raises:
        The exception raised by the final attempt.
    """
    exception = retry_state.outcome.exception() if retry_state.outcome else None
    api_name = getattr(retry_state.fn, "_api_name", "unknown") if retry_state.fn else "unknown"

    logger.error(
        "API call failed after all retries",
        api_name=api_name,
        attempts=retry_state.attempt_number,
        exception=str(exception),
    )

    if exception is None:  # pragma: no cover - callback only fires after a failure
        msg = f"{api_name} failed without an exception"
        raise RuntimeError(msg)
    raise exception


def _before_sleep_log(retry_state: RetryCallState) -> None:
    """Log a warning before each retry attempt.

    Args:
        retry_state: Tenacity retry state with attempt info.
    """
    api_name = getattr(retry_state.fn, "_api_name", "unknown") if retry_state.fn else "unknown"
    logger.warning(
        "Retrying API call",
        api_name=api_name,
        attempt=retry_state.attempt_number,
        wait=retry_state.next_action.sleep if retry_state.next_action else 0,
    )


def resilient_api_call(
    api_name: str,
    max_retries: int = 2,
    *,
    initial_wait: float = 0.5,
    max_wait: float = 4.0,
) -> Callable[[F], F]:
    """Create a retry decorator for an API call.

    Works for both plain and ``async`` callables.  The wrapped call is made
    at most ``1 + max_retries`` times with exponential backoff and jitter
    between attempts.  The original exception is re-raised after exhaustion.

    Args:
        api_name: Human-readable name for the API (used in logs).
        max_retries: Number of retries after the first attempt.
        initial_wait: First backoff interval in seconds.
        max_wait: Upper bound on a single backoff interval in seconds.

    Returns:
        A decorator that wraps the function with retry logic.
    """

    def decorator(func: F) -> F:
        # Store api_name on function for the logging callbacks
        func._api_name = api_name  # type: ignore[attr-defined]

        wrapped = retry(
            stop=stop_after_attempt(max_retries + 1),
            wait=wait_exponential_jitter(initial=initial_wait, max=max_wait, jitter=initial_wait),
            before_sleep=_before_sleep_log,
            retry_error_callback=log_final_failure,
            reraise=True,
        )(func)

        return wrapped  # type: ignore[no-any-return]

    return decorator
