"""Retry policy and per-run retry state."""

from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class RetryPolicy:
    """Immutable retry behaviour for one class of operation.

    Attributes:
        max_attempts: Total attempts including the first
        base_delay_seconds: Backoff before the first retry
        max_delay_seconds: Cap on any single backoff
        timeout_seconds: Deadline applied to each attempt

    Example:
        policy = RetryPolicy(max_attempts=5, base_delay_seconds=0.1,
                             max_delay_seconds=1.5, timeout_seconds=5.0)
        policy.delay_for(3)  # 0.8
    """

    max_attempts: int = 3
    base_delay_seconds: float = 0.1
    max_delay_seconds: float = 1.0
    timeout_seconds: float = 3.0

    def __post_init__(self) -> None:
        """Validate policy values."""
        if self.max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        if self.base_delay_seconds < 0:
            raise ValueError("base_delay_seconds must be >= 0")
        if self.max_delay_seconds < self.base_delay_seconds:
            raise ValueError("max_delay_seconds must be >= base_delay_seconds")
        if self.timeout_seconds <= 0:
            raise ValueError("timeout_seconds must be > 0")

    def delay_for(self, retry_index: int) -> float:
        """Backoff before retry ``retry_index`` (zero-based, first retry is 0)."""
        return min(self.base_delay_seconds * (2**retry_index), self.max_delay_seconds)


@dataclass
class RetryState:
    """Progress of a single ``RetryExecutor.run`` call."""

    policy: RetryPolicy
    attempts: int = 0
    last_error: Optional[BaseException] = field(default=None)

    @property
    def exhausted(self) -> bool:
        return self.attempts >= self.policy.max_attempts

    @property
    def next_delay(self) -> float:
        """Delay to wait before the next attempt, given attempts made so far."""
        return self.policy.delay_for(self.attempts - 1)

    def record_failure(self, error: BaseException) -> None:
        self.attempts += 1
        self.last_error = error
