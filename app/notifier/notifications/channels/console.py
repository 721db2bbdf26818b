"""Console channel writing the payload to the log stream."""

import structlog

from notifier.models import IncidentState, NotificationTarget
from notifier.notifications.channels.base import NotificationChannel
from notifier.notifications.models import NotificationResult, NotificationStatus

logger = structlog.get_logger()


class ConsoleChannel(NotificationChannel):
    """Logs the subject, or subject and body when ``use_body`` is set."""

    @property
    def channel_name(self) -> str:
        return "print"

    def is_active(self, target: NotificationTarget) -> bool:
        return target.print_payload

    @staticmethod
    def format_payload(incident: IncidentState, target: NotificationTarget) -> str:
        if target.use_body:
            return f"Subject: {incident.subject}, Body: {incident.body}"
        return incident.subject

    def send(
        self, incident: IncidentState, target: NotificationTarget
    ) -> NotificationResult:
        payload = self.format_payload(incident, target)
        logger.info("print_notification", alert_key=incident.alert_key, payload=payload)
        return self._result(incident, target, NotificationStatus.SENT, payload)
