"""Retry policy infrastructure settings."""

from pydantic import Field

from infrastructure.configuration.base import InfrastructureSettings
from infrastructure.resilience.retry.policy import RetryPolicy


class RetrySettings(InfrastructureSettings):
    """Retry policies for durable-store and status operations.

    Each operation class gets its own immutable RetryPolicy: writes tolerate
    more attempts, read-modify updates prefer staleness over request
    amplification, and hot-path status reads fail fast.

    Environment Variables:
        RETRY_WRITE_MAX_ATTEMPTS / _BASE_DELAY_SECONDS / _MAX_DELAY_SECONDS / _TIMEOUT_SECONDS
        RETRY_READ_MAX_ATTEMPTS / ...
        RETRY_READ_MODIFY_MAX_ATTEMPTS / ...
        RETRY_STATUS_MAX_ATTEMPTS / ...

    Exponential Backoff:
        Delay before retry ``i`` (zero-based, first attempt excluded):
        min(base_delay * (2 ^ i), max_delay)

        Example with write defaults (base=0.1s, max=1.5s, 5 attempts):
            Retry 0: 0.1s
            Retry 1: 0.2s
            Retry 2: 0.4s
            Retry 3: 0.8s

    Example:
        ```python
        from infrastructure.services import get_settings

        policy = get_settings().retry.write_policy()
        result = await executor.run(insert_document, policy)
        ```
    """

    write_max_attempts: int = Field(default=5, alias="RETRY_WRITE_MAX_ATTEMPTS")
    write_base_delay_seconds: float = Field(
        default=0.1, alias="RETRY_WRITE_BASE_DELAY_SECONDS"
    )
    write_max_delay_seconds: float = Field(
        default=1.5, alias="RETRY_WRITE_MAX_DELAY_SECONDS"
    )
    write_timeout_seconds: float = Field(default=5.0, alias="RETRY_WRITE_TIMEOUT_SECONDS")

    read_max_attempts: int = Field(default=3, alias="RETRY_READ_MAX_ATTEMPTS")
    read_base_delay_seconds: float = Field(
        default=0.1, alias="RETRY_READ_BASE_DELAY_SECONDS"
    )
    read_max_delay_seconds: float = Field(
        default=1.0, alias="RETRY_READ_MAX_DELAY_SECONDS"
    )
    read_timeout_seconds: float = Field(default=3.0, alias="RETRY_READ_TIMEOUT_SECONDS")

    read_modify_max_attempts: int = Field(
        default=2, alias="RETRY_READ_MODIFY_MAX_ATTEMPTS"
    )
    read_modify_base_delay_seconds: float = Field(
        default=0.1, alias="RETRY_READ_MODIFY_BASE_DELAY_SECONDS"
    )
    read_modify_max_delay_seconds: float = Field(
        default=0.5, alias="RETRY_READ_MODIFY_MAX_DELAY_SECONDS"
    )
    read_modify_timeout_seconds: float = Field(
        default=1.5, alias="RETRY_READ_MODIFY_TIMEOUT_SECONDS"
    )

    status_max_attempts: int = Field(default=1, alias="RETRY_STATUS_MAX_ATTEMPTS")
    status_base_delay_seconds: float = Field(
        default=0.1, alias="RETRY_STATUS_BASE_DELAY_SECONDS"
    )
    status_max_delay_seconds: float = Field(
        default=0.1, alias="RETRY_STATUS_MAX_DELAY_SECONDS"
    )
    status_timeout_seconds: float = Field(
        default=1.5, alias="RETRY_STATUS_TIMEOUT_SECONDS"
    )

    def write_policy(self) -> RetryPolicy:
        """Policy for inserts and single-document updates."""
        return RetryPolicy(
            max_attempts=self.write_max_attempts,
            base_delay_seconds=self.write_base_delay_seconds,
            max_delay_seconds=self.write_max_delay_seconds,
            timeout_seconds=self.write_timeout_seconds,
        )

    def read_policy(self) -> RetryPolicy:
        """Policy for conversation and status reads."""
        return RetryPolicy(
            max_attempts=self.read_max_attempts,
            base_delay_seconds=self.read_base_delay_seconds,
            max_delay_seconds=self.read_max_delay_seconds,
            timeout_seconds=self.read_timeout_seconds,
        )

    def read_modify_policy(self) -> RetryPolicy:
        """Policy for bulk read-receipt updates."""
        return RetryPolicy(
            max_attempts=self.read_modify_max_attempts,
            base_delay_seconds=self.read_modify_base_delay_seconds,
            max_delay_seconds=self.read_modify_max_delay_seconds,
            timeout_seconds=self.read_modify_timeout_seconds,
        )

    def status_policy(self) -> RetryPolicy:
        """Fail-fast policy for hot-path flag reads."""
        return RetryPolicy(
            max_attempts=self.status_max_attempts,
            base_delay_seconds=self.status_base_delay_seconds,
            max_delay_seconds=self.status_max_delay_seconds,
            timeout_seconds=self.status_timeout_seconds,
        )
