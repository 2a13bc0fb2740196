"""Error taxonomy for the notification core.

Every layer raises these types; the HTTP server maps them to responses
using ``status_code`` and ``error_code``.
"""

from typing import Any, Optional


class RealtimeCoreError(Exception):
    """Base class for all errors raised by the core."""

    status_code: int = 500
    error_code: str = "internal_error"

    def __init__(self, message: str = "", **details: Any):
        super().__init__(message)
        self.message = message
        self.details = details

    def to_dict(self) -> dict[str, Any]:
        body: dict[str, Any] = {"error": self.error_code, "message": self.message}
        if self.details:
            body["details"] = self.details
        return body


class ValidationError(RealtimeCoreError):
    """Malformed caller input. Never retried."""

    status_code = 400
    error_code = "validation_error"


class UnauthorizedError(RealtimeCoreError):
    """Channel authorization denied. Never retried, no side effects."""

    status_code = 403
    error_code = "unauthorized"

    def __init__(self, message: str = "", channel: Optional[str] = None, **details):
        if channel is not None:
            details["channel"] = channel
        super().__init__(message, **details)
        self.channel = channel


class OperationTimeout(RealtimeCoreError):
    """A single attempt exceeded its deadline."""

    status_code = 504
    error_code = "timeout"

    def __init__(self, message: str = "", timeout_seconds: Optional[float] = None):
        super().__init__(message, timeout_seconds=timeout_seconds)
        self.timeout_seconds = timeout_seconds


class RetryExhausted(RealtimeCoreError):
    """All attempts allowed by a retry policy failed."""

    status_code = 503
    error_code = "retry_exhausted"

    def __init__(
        self,
        message: str = "",
        attempts: int = 0,
        last_error: Optional[BaseException] = None,
    ):
        super().__init__(message, attempts=attempts)
        self.attempts = attempts
        self.last_error = last_error


class PersistenceFailure(RealtimeCoreError):
    """A durable write or read could not be completed."""

    status_code = 503
    error_code = "persistence_failure"

    def __init__(self, message: str = "", operation: str = "", attempts: int = 0):
        super().__init__(message, operation=operation, attempts=attempts)
        self.operation = operation
        self.attempts = attempts


class DeliveryFailure(RealtimeCoreError):
    """Publishing failed after the state change was persisted.

    ``persisted`` holds whatever the dispatcher already saved so the caller
    can report a partial success.
    """

    status_code = 202
    error_code = "delivery_failure"

    def __init__(
        self,
        message: str = "",
        channel: Optional[str] = None,
        event: Optional[str] = None,
        persisted: Any = None,
    ):
        super().__init__(message, channel=channel, event=event)
        self.channel = channel
        self.event = event
        self.persisted = persisted


class AuthenticationError(RealtimeCoreError):
    """Missing or invalid credentials on an inbound request."""

    status_code = 401
    error_code = "unauthenticated"
