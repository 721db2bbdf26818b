"""Result value for outcomes that are reported instead of raised."""

from dataclasses import dataclass
from typing import Any, Optional

from notifier.operations.status import OperationStatus


@dataclass(frozen=True)
class OperationResult:
    """Outcome of a delivery step.

    Attributes:
        status: Outcome category
        message: Text for logs and notification results
        data: Step-specific payload
        error_code: Machine-readable code, set for failures
    """

    status: OperationStatus
    message: str
    data: Optional[Any] = None
    error_code: Optional[str] = None

    @property
    def is_success(self) -> bool:
        return self.status is OperationStatus.SUCCESS

    @classmethod
    def success(cls, data: Optional[Any] = None, message: str = "ok") -> "OperationResult":
        return cls(OperationStatus.SUCCESS, message, data=data)

    @classmethod
    def failure(
        cls,
        status: OperationStatus,
        message: str,
        error_code: Optional[str] = None,
        data: Optional[Any] = None,
    ) -> "OperationResult":
        """Build a non-success result with an explicit status."""
        return cls(status, message, data=data, error_code=error_code)

    @classmethod
    def transient_error(cls, message: str, error_code: Optional[str] = None) -> "OperationResult":
        """Connection refused or reset, TLS failure, relay gone mid-session."""
        return cls.failure(OperationStatus.TRANSIENT_ERROR, message, error_code)

    @classmethod
    def permanent_error(cls, message: str, error_code: Optional[str] = None) -> "OperationResult":
        """Invalid message or template, or a relay rejection."""
        return cls.failure(OperationStatus.PERMANENT_ERROR, message, error_code)

    @classmethod
    def unauthorized(
        cls, message: str, error_code: Optional[str] = "AUTH_FAILED"
    ) -> "OperationResult":
        """Credentials refused by the relay."""
        return cls.failure(OperationStatus.UNAUTHORIZED, message, error_code)
