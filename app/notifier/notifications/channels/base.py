"""Notification channel abstract base class.

All channel implementations (email, post, get, print) implement this
interface.
"""

from abc import ABC, abstractmethod

from notifier.models import IncidentState, NotificationTarget
from notifier.notifications.models import NotificationResult, NotificationStatus


class NotificationChannel(ABC):
    """Abstract base class for notification channels.

    Each channel handles delivery through one mechanism:
    - EmailChannel: SMTP relay
    - PostChannel: HTTP POST of the payload
    - GetChannel: HTTP GET of a URL
    - ConsoleChannel: log line
    """

    @property
    @abstractmethod
    def channel_name(self) -> str:
        """Channel identifier used for logging and results."""
        pass

    @abstractmethod
    def is_active(self, target: NotificationTarget) -> bool:
        """Check whether the target configures this channel."""
        pass

    @abstractmethod
    def send(
        self, incident: IncidentState, target: NotificationTarget
    ) -> NotificationResult:
        """Deliver the incident through this channel.

        Must handle errors and return a NotificationResult with FAILED
        status rather than raising.
        """
        pass

    def _result(
        self,
        incident: IncidentState,
        target: NotificationTarget,
        status: NotificationStatus,
        message: str,
        **kwargs,
    ) -> NotificationResult:
        return NotificationResult(
            channel=self.channel_name,
            status=status,
            message=message,
            alert_key=incident.alert_key,
            notification=target.name,
            **kwargs,
        )
