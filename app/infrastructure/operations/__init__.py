"""Operation result types returned by external integrations."""

from infrastructure.operations.result import OperationResult
from infrastructure.operations.status import OperationStatus

__all__ = ["OperationResult", "OperationStatus"]
