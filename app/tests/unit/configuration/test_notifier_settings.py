"""Unit tests for the settings aggregator."""

import pytest
from pydantic import ValidationError

from notifier.configuration import NotificationSettings, Settings, SMTPSettings


@pytest.mark.unit
class TestSMTPSettings:
    """Tests for SMTPSettings."""

    def test_defaults(self, monkeypatch):
        for name in ("EMAIL_FROM", "SMTP_HOST", "SMTP_USERNAME", "SMTP_PASSWORD", "SMTP_TIMEOUT"):
            monkeypatch.delenv(name, raising=False)

        settings = SMTPSettings(_env_file=None)

        assert settings.EMAIL_FROM == ""
        assert settings.SMTP_HOST == "localhost:25"
        assert settings.SMTP_USERNAME == ""
        assert settings.SMTP_VERIFY_SERVER_CERTIFICATE is False
        assert settings.SMTP_TIMEOUT is None

    def test_reads_environment(self, monkeypatch):
        monkeypatch.setenv("EMAIL_FROM", "alerts@example.com")
        monkeypatch.setenv("SMTP_HOST", "mail.example.com:587")
        monkeypatch.setenv("SMTP_VERIFY_SERVER_CERTIFICATE", "true")
        monkeypatch.setenv("SMTP_TIMEOUT", "7.5")

        settings = SMTPSettings(_env_file=None)

        assert settings.EMAIL_FROM == "alerts@example.com"
        assert settings.SMTP_HOST == "mail.example.com:587"
        assert settings.SMTP_VERIFY_SERVER_CERTIFICATE is True
        assert settings.SMTP_TIMEOUT == 7.5


@pytest.mark.unit
class TestNotificationSettings:
    """Tests for NotificationSettings."""

    def test_defaults(self, monkeypatch):
        monkeypatch.delenv("NOTIFY_MAX_WORKERS", raising=False)
        monkeypatch.delenv("HTTP_TIMEOUT", raising=False)
        monkeypatch.delenv("METRICS_NAMESPACE", raising=False)

        settings = NotificationSettings(_env_file=None)

        assert settings.NOTIFY_MAX_WORKERS is None
        assert settings.HTTP_TIMEOUT is None
        assert settings.METRICS_NAMESPACE == "notifier"

    def test_workers_must_be_positive(self):
        with pytest.raises(ValidationError):
            NotificationSettings(NOTIFY_MAX_WORKERS=0)

    def test_workers_from_environment(self, monkeypatch):
        monkeypatch.setenv("NOTIFY_MAX_WORKERS", "3")

        assert NotificationSettings(_env_file=None).NOTIFY_MAX_WORKERS == 3


@pytest.mark.unit
class TestSettings:
    """Tests for the Settings aggregator."""

    def test_builds_subsettings(self):
        settings = Settings()

        assert isinstance(settings.smtp, SMTPSettings)
        assert isinstance(settings.notifications, NotificationSettings)

    def test_overrides_kept(self, smtp_settings):
        settings = Settings(smtp=smtp_settings)

        assert settings.smtp is smtp_settings

    def test_is_production_without_prefix(self, monkeypatch):
        monkeypatch.delenv("PREFIX", raising=False)

        assert Settings(_env_file=None).is_production is True

    def test_not_production_with_prefix(self, monkeypatch):
        monkeypatch.setenv("PREFIX", "dev-")

        assert Settings(_env_file=None).is_production is False
