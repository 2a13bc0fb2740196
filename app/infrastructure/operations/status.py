"""Operation status enumeration."""

from enum import Enum


class OperationStatus(Enum):
    """Outcome of a call into an external system.

    Attributes:
        SUCCESS: Call completed
        TRANSIENT_ERROR: Connection loss, timeout or overload; may succeed later
        PERMANENT_ERROR: Rejected request that will not succeed on repeat
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
