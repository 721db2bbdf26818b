"""Incident notification delivery.

Provides fan-out of incident alerts to email, HTTP POST, HTTP GET and
console channels:
- Message assembly with templated payloads, HTML bodies and attachments
- An SMTP session driver with opportunistic STARTTLS and best-effort auth
- Sent/failed email counters through an injected metrics handle
- Fire-and-forget dispatch, one background task per channel

Usage:
    from notifier.models import IncidentState, NotificationTarget
    from notifier.notifications import NotificationDispatcher

    target = NotificationTarget(
        name="ops",
        email=["ops@example.com"],
        post="https://hooks.example.com/alerts",
        print=True,
    )
    incident = IncidentState(
        alert_key="cpu.high{host=web01}",
        subject="critical: cpu.high on web01",
        body="cpu at 98%",
        email_subject="critical: cpu.high on web01",
        email_body="<p>cpu at 98%</p>",
    )

    dispatcher = NotificationDispatcher()
    dispatcher.notify(incident, target)
"""

from notifier.notifications.models import NotificationResult, NotificationStatus
from notifier.notifications.message import (
    OutboundMessage,
    build_message,
    render_payload,
)
from notifier.notifications.smtp import send_mail, send_message
from notifier.notifications.metrics import EmailMetrics, PrometheusEmailMetrics
from notifier.notifications.channels import (
    NotificationChannel,
    ConsoleChannel,
    EmailChannel,
    GetChannel,
    PostChannel,
)
from notifier.notifications.dispatcher import NotificationDispatcher

__all__ = [
    "NotificationResult",
    "NotificationStatus",
    "OutboundMessage",
    "build_message",
    "render_payload",
    "send_mail",
    "send_message",
    "EmailMetrics",
    "PrometheusEmailMetrics",
    "NotificationChannel",
    "ConsoleChannel",
    "EmailChannel",
    "GetChannel",
    "PostChannel",
    "NotificationDispatcher",
]
