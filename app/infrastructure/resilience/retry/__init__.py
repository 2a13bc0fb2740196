"""Retry executor with per-attempt deadlines and exponential backoff.

Usage:
    from infrastructure.resilience.retry import RetryExecutor, RetryPolicy

    executor = RetryExecutor()
    result = await executor.run(fetch, RetryPolicy(max_attempts=3))
"""

from infrastructure.resilience.retry.executor import RetryExecutor
from infrastructure.resilience.retry.policy import RetryPolicy, RetryState

__all__ = ["RetryExecutor", "RetryPolicy", "RetryState"]
