"""Operation result types and status enums.

Standardized result types for delivery steps, including the status enum,
the result dataclass and the delivery error classifier.
"""

from notifier.operations.classifiers import classify_delivery_error
from notifier.operations.result import OperationResult
from notifier.operations.status import OperationStatus

__all__ = [
    "OperationResult",
    "OperationStatus",
    "classify_delivery_error",
]
