"""Resilience patterns: retry execution with timeouts and backoff."""

from infrastructure.resilience.retry import RetryExecutor, RetryPolicy, RetryState

__all__ = ["RetryExecutor", "RetryPolicy", "RetryState"]
