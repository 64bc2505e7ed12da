"""
Resilience Infrastructure.

Circuit breaker listener, retry callback, and the composed call wrapper used
for every outbound HTTP dependency (moderation classifier, URL shorteners).

The composed resilience stack is always applied in this order (outside-in):
    Circuit Breaker (aiobreaker) → Retry (tenacity) → Semaphore → Timeout → Call

Usage:
    from wallboard.backend.core.resilience import get_circuit_breaker, call_with_resilience

    breaker = get_circuit_breaker("moderation", fail_max=5, timeout_duration=60)
    response = await call_with_resilience(
        breaker,
        lambda: client.post(url, json=payload),
        timeout_seconds=5,
    )
"""

import asyncio
from collections.abc import Awaitable, Callable
from datetime import timedelta
from typing import Any, TypeVar

import aiobreaker
import httpx
from tenacity import (
    AsyncRetrying,
    retry_if_exception_type,
    stop_after_attempt,
    wait_exponential,
)

from wallboard.backend.core.concurrency import get_semaphore
from wallboard.backend.core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")

RETRYABLE_EXCEPTIONS = (httpx.TransportError, TimeoutError)


class ResilienceLogger(aiobreaker.CircuitBreakerListener):
    """Circuit breaker listener that emits structured resilience events.

    Every state transition is logged with a standardized set of fields
    so that resilience events can be filtered and aggregated:

        jq 'select(.resilience_event != null)' logs/system.jsonl
    """

    def __init__(self, dependency: str) -> None:
        self.dependency = dependency

    def state_change(self, cb: aiobreaker.CircuitBreaker, old_state: Any, new_state: Any) -> None:
        event_map = {
            "open": "circuit_breaker_opened",
            "half-open": "circuit_breaker_half_open",
            "closed": "circuit_breaker_closed",
        }
        new_str = str(new_state).lower()
        event = event_map.get(new_str, f"circuit_breaker_{new_str}")
        log_level = "error" if new_str == "open" else "info"

        getattr(logger, log_level)(
            f"Circuit breaker {self.dependency}: {old_state} → {new_state}",
            extra={
                "resilience_event": event,
                "dependency": self.dependency,
                "failure_count": cb.fail_counter,
            },
        )

    def failure(self, cb: aiobreaker.CircuitBreaker, exception: Exception) -> None:
        logger.warning(
            f"Circuit breaker {self.dependency}: failure recorded",
            extra={
                "resilience_event": "circuit_breaker_failure",
                "dependency": self.dependency,
                "failure_count": cb.fail_counter,
                "error": str(exception),
            },
        )


def log_retry(retry_state: Any) -> None:
    """Tenacity before_sleep callback that emits structured retry events."""
    duration_ms = None
    if retry_state.outcome_timestamp and retry_state.start_time:
        duration_ms = round(
            (retry_state.outcome_timestamp - retry_state.start_time) * 1000
        )

    error = None
    if retry_state.outcome and retry_state.outcome.failed:
        error = str(retry_state.outcome.exception())

    fn_name = getattr(retry_state.fn, "__name__", "unknown")

    logger.warning(
        f"Retrying {fn_name} (attempt {retry_state.attempt_number})",
        extra={
            "resilience_event": "retry_attempt",
            "dependency": fn_name,
            "attempt": retry_state.attempt_number,
            "duration_ms": duration_ms,
            "error": error,
        },
    )


def create_circuit_breaker(
    dependency: str,
    fail_max: int = 5,
    timeout_duration: int = 30,
) -> aiobreaker.CircuitBreaker:
    """Create a circuit breaker with structured logging.

    Args:
        dependency: Name of the external dependency (for logging)
        fail_max: Number of failures before opening
        timeout_duration: Seconds to wait before half-open test

    Returns:
        Configured CircuitBreaker instance
    """
    return aiobreaker.CircuitBreaker(
        fail_max=fail_max,
        timeout_duration=timedelta(seconds=timeout_duration),
        listeners=[ResilienceLogger(dependency)],
    )


async def call_with_resilience(
    breaker: aiobreaker.CircuitBreaker,
    call: Callable[[], Awaitable[T]],
    timeout_seconds: float,
    attempts: int = 2,
    semaphore: str = "external_api",
) -> T:
    """
    Run an outbound call through breaker, retry, semaphore and timeout.

    Transport errors and timeouts are retried; anything else propagates on
    the first failure. When the breaker is open the call is not attempted
    and aiobreaker.CircuitBreakerError is raised.
    """

    async def _guarded() -> T:
        async with get_semaphore(semaphore):
            async with asyncio.timeout(timeout_seconds):
                return await call()

    async def _with_retry() -> T:
        async for attempt in AsyncRetrying(
            stop=stop_after_attempt(attempts),
            wait=wait_exponential(multiplier=0.2, min=0.2, max=2),
            retry=retry_if_exception_type(RETRYABLE_EXCEPTIONS),
            before_sleep=log_retry,
            reraise=True,
        ):
            with attempt:
                return await _guarded()
        raise RuntimeError("unreachable")  # pragma: no cover

    return await breaker.call_async(_with_retry)


_breakers: dict[str, aiobreaker.CircuitBreaker] = {}


def get_circuit_breaker(
    dependency: str,
    fail_max: int = 5,
    timeout_duration: int = 30,
) -> aiobreaker.CircuitBreaker:
    """Process-wide breaker for a dependency, created on first use."""
    breaker = _breakers.get(dependency)
    if breaker is None:
        breaker = _breakers[dependency] = create_circuit_breaker(
            dependency,
            fail_max=fail_max,
            timeout_duration=timeout_duration,
        )
    return breaker


def reset_circuit_breakers() -> None:
    _breakers.clear()
