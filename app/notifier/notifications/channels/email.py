"""Email channel delivering through an SMTP relay."""

import smtplib
from typing import Callable, Optional

import structlog

from notifier.configuration import SMTPSettings
from notifier.models import IncidentState, NotificationTarget
from notifier.notifications.channels.base import NotificationChannel
from notifier.notifications.message import build_message
from notifier.notifications.metrics import EmailMetrics
from notifier.notifications.models import NotificationResult, NotificationStatus
from notifier.notifications.smtp import send_message
from notifier.operations import classify_delivery_error

logger = structlog.get_logger()


class EmailChannel(NotificationChannel):
    """Email notification channel.

    Builds one message for all To/Cc/Bcc recipients of the target and
    sends it in a single SMTP session. Any error fails the whole send.
    Each terminal outcome increments exactly one counter.

    Args:
        settings: Relay, credentials and sender configuration.
        metrics: Counter handle for sent/failed emails.
        client_factory: Optional ``smtplib.SMTP`` replacement.
    """

    def __init__(
        self,
        settings: SMTPSettings,
        metrics: EmailMetrics,
        client_factory: Optional[Callable[..., smtplib.SMTP]] = None,
    ):
        self._settings = settings
        self._metrics = metrics
        self._client_factory = client_factory

    @property
    def channel_name(self) -> str:
        return "email"

    def is_active(self, target: NotificationTarget) -> bool:
        return target.has_email

    def send(
        self, incident: IncidentState, target: NotificationTarget
    ) -> NotificationResult:
        """Build and relay the incident email.

        Args:
            incident: Incident to report.
            target: Target supplying recipients and payload options.

        Returns:
            NotificationResult, FAILED with a classified error code on any
            validation, template, transport or protocol error.
        """
        sender = self._settings.EMAIL_FROM
        recipients = [*target.email, *target.email_cc, *target.email_bcc]
        try:
            message = build_message(sender, incident, target)
            send_message(
                message,
                self._settings.SMTP_HOST,
                self._settings.SMTP_USERNAME,
                self._settings.SMTP_PASSWORD,
                verify_server_certificate=self._settings.SMTP_VERIFY_SERVER_CERTIFICATE,
                timeout=self._settings.SMTP_TIMEOUT,
                client_factory=self._client_factory,
            )
        except Exception as exc:
            self._metrics.record_failed()
            classification = classify_delivery_error(exc)
            logger.error(
                "email_send_failed",
                alert_key=incident.alert_key,
                sender=sender,
                recipients=recipients,
                error=str(exc),
                error_code=classification.error_code,
            )
            return self._result(
                incident,
                target,
                NotificationStatus.FAILED,
                classification.message,
                error_code=classification.error_code,
            )

        self._metrics.record_sent()
        logger.info(
            "email_relayed",
            alert_key=incident.alert_key,
            recipients=recipients,
            subject_bytes=len(incident.email_subject.encode("utf-8")),
            body_bytes=len(incident.email_body.encode("utf-8")),
        )
        return self._result(
            incident,
            target,
            NotificationStatus.SENT,
            f"Relayed email to {len(recipients)} recipient(s)",
        )
