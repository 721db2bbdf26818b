"""Notification delivery result models."""

from enum import Enum
from typing import Optional

from pydantic import BaseModel


class NotificationStatus(Enum):
    """Outcome of one channel task."""

    SENT = "sent"
    FAILED = "failed"


class NotificationResult(BaseModel):
    """Result of one channel delivering one incident.

    Channel tasks never raise; the result is the value of the task's
    future and is otherwise only reflected in logs and counters.

    Attributes:
        channel: Channel name (email, post, get, print)
        status: Delivery status
        message: Human-readable result message
        alert_key: Alert key of the incident
        notification: Name of the notification target
        error_code: Machine error code for failures
        status_code: HTTP status for post/get channels
        correlation_id: Correlation id bound to the task's log events
    """

    channel: str
    status: NotificationStatus
    message: str
    alert_key: str
    notification: str = ""
    error_code: Optional[str] = None
    status_code: Optional[int] = None
    correlation_id: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """True when the channel delivered."""
        return self.status == NotificationStatus.SENT
