"""Shared fixtures for notifier tests."""

from typing import Dict, List, Optional
from unittest.mock import MagicMock

import pytest
from prometheus_client import CollectorRegistry

from notifier.configuration import NotificationSettings, Settings, SMTPSettings
from notifier.models import Attachment, IncidentState, NotificationTarget
from notifier.notifications.metrics import PrometheusEmailMetrics


@pytest.fixture
def incident_factory():
    """Factory for creating IncidentState instances.

    Example:
        incident = incident_factory(subject="warning: disk.full")
        with_attachment = incident_factory(
            attachments=[Attachment(filename="graph.png", data=b"...")]
        )
    """

    def _factory(
        alert_key: str = "cpu.high{host=web01}",
        subject: str = "critical: cpu.high on web01",
        body: str = "cpu at 98% on web01",
        email_subject: str = "critical: cpu.high on web01",
        email_body: str = "<p>cpu at <b>98%</b> on web01</p>",
        attachments: Optional[List[Attachment]] = None,
        tags: Optional[Dict[str, str]] = None,
        **kwargs,
    ) -> IncidentState:
        return IncidentState(
            alert_key=alert_key,
            subject=subject,
            body=body,
            email_subject=email_subject,
            email_body=email_body,
            attachments=attachments or [],
            tags=tags if tags is not None else {"host": "web01"},
            **kwargs,
        )

    return _factory


@pytest.fixture
def target_factory():
    """Factory for creating NotificationTarget instances.

    Defaults to a target with only the email channel configured.
    """

    def _factory(
        name: str = "ops",
        email: Optional[List[str]] = None,
        **kwargs,
    ) -> NotificationTarget:
        return NotificationTarget(
            name=name,
            email=email if email is not None else ["ops@example.com"],
            **kwargs,
        )

    return _factory


@pytest.fixture
def smtp_settings():
    """SMTPSettings pointing at a fake relay with credentials."""
    return SMTPSettings(
        EMAIL_FROM="alerts@example.com",
        SMTP_HOST="mail.example.com:587",
        SMTP_USERNAME="notifier",
        SMTP_PASSWORD="hunter2",
    )


@pytest.fixture
def settings(smtp_settings):
    """Settings instance built from explicit sub-settings."""
    return Settings(
        smtp=smtp_settings,
        notifications=NotificationSettings(_env_file=None),
    )


@pytest.fixture
def metrics():
    """PrometheusEmailMetrics on a private registry."""
    return PrometheusEmailMetrics(namespace="test", registry=CollectorRegistry())


@pytest.fixture
def smtp_client():
    """MagicMock standing in for a connected ``smtplib.SMTP``.

    Replies are those of a relay that accepts everything and does not
    advertise STARTTLS. Tests adjust return values per scenario.
    """
    client = MagicMock()
    client.has_extn.return_value = False
    client.starttls.return_value = (220, b"2.0.0 Ready to start TLS")
    client.auth.return_value = (235, b"2.7.0 Authentication successful")
    client.mail.return_value = (250, b"2.1.0 Ok")
    client.rcpt.return_value = (250, b"2.1.5 Ok")
    client.data.return_value = (250, b"2.0.0 Ok: queued")
    client.quit.return_value = (221, b"2.0.0 Bye")
    return client


@pytest.fixture
def smtp_factory(smtp_client):
    """Client factory returning ``smtp_client``."""
    return MagicMock(return_value=smtp_client)
