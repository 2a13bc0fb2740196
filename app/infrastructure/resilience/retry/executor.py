"""Timeout-and-backoff wrapper for unreliable async operations.

Each attempt runs under ``asyncio.wait_for``; a timed-out attempt is
cancelled, so coroutine-based operations stop at their next suspension
point. Work pushed to a thread (``asyncio.to_thread``) cannot be
interrupted and keeps running after its attempt is abandoned.
"""

import asyncio
from typing import Awaitable, Callable, Optional, TypeVar

import structlog

from infrastructure.exceptions import (
    OperationTimeout,
    RetryExhausted,
    UnauthorizedError,
    ValidationError,
)
from infrastructure.resilience.retry.policy import RetryPolicy, RetryState

logger = structlog.get_logger()

T = TypeVar("T")

# Raised by operations for caller mistakes; repeating cannot help
NON_RETRYABLE = (ValidationError, UnauthorizedError)


class RetryExecutor:
    """Runs an operation with a per-attempt deadline and capped exponential backoff.

    The executor holds no per-call state; every ``run`` owns its own
    ``RetryState``.

    Args:
        sleep: Coroutine function used for backoff waits.
    """

    def __init__(self, sleep: Callable[[float], Awaitable[None]] = asyncio.sleep):
        self._sleep = sleep
        self.log = logger.bind(component="retry_executor")

    async def run(
        self,
        operation: Callable[[], Awaitable[T]],
        policy: RetryPolicy,
        operation_name: Optional[str] = None,
    ) -> T:
        """Run ``operation`` until it succeeds or the policy is exhausted.

        Args:
            operation: Zero-argument coroutine function.
            policy: Attempts, backoff and deadline to apply.
            operation_name: Label used in log entries.

        Returns:
            The operation's result.

        Raises:
            ValidationError, UnauthorizedError: Re-raised from the operation
                without retrying.
            RetryExhausted: Every attempt failed; ``last_error`` holds the
                final failure.
        """
        name = operation_name or getattr(operation, "__name__", "operation")
        state = RetryState(policy=policy)

        while True:
            try:
                return await asyncio.wait_for(operation(), timeout=policy.timeout_seconds)
            except NON_RETRYABLE:
                raise
            except asyncio.TimeoutError:
                error: Exception = OperationTimeout(
                    f"{name} exceeded {policy.timeout_seconds}s",
                    timeout_seconds=policy.timeout_seconds,
                )
            except Exception as e:
                error = e

            state.record_failure(error)
            self.log.warning(
                "retry_attempt_failed",
                operation=name,
                attempt=state.attempts,
                max_attempts=policy.max_attempts,
                error=str(error),
                error_type=type(error).__name__,
            )

            if state.exhausted:
                self.log.error(
                    "retry_exhausted",
                    operation=name,
                    attempts=state.attempts,
                    error=str(error),
                )
                raise RetryExhausted(
                    f"{name} failed after {state.attempts} attempt(s)",
                    attempts=state.attempts,
                    last_error=error,
                ) from error

            await self._sleep(state.next_delay)
