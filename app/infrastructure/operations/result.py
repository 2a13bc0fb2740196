"""Operation result dataclass.

Broker clients and other integrations report outcomes through this type
instead of raising, leaving the caller to decide how a failure surfaces.
"""

from dataclasses import dataclass
from typing import Any, Optional

from infrastructure.operations.status import OperationStatus


@dataclass(frozen=True)
class OperationResult:
    """Uniform result returned from integration calls.

    Attributes:
        status: High-level outcome
        message: Human-friendly message for logs
        data: Optional payload
        error_code: Optional machine error code
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status == OperationStatus.SUCCESS

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(status=OperationStatus.SUCCESS, message=message, data=data)

    @classmethod
    def transient_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a result for a failure that may succeed if attempted again."""
        return cls(
            status=OperationStatus.TRANSIENT_ERROR,
            message=message,
            error_code=error_code,
        )

    @classmethod
    def permanent_error(
        cls, message: str, error_code: Optional[str] = None
    ) -> "OperationResult":
        """Create a result for a failure that will not succeed if repeated."""
        return cls(
            status=OperationStatus.PERMANENT_ERROR,
            message=message,
            error_code=error_code,
        )
