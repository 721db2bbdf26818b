"""Unit tests for notification log context binding."""

import pytest
import structlog

from notifier.logging import bind_notification_context, get_correlation_id


@pytest.fixture(autouse=True)
def clean_context():
    structlog.contextvars.clear_contextvars()
    yield
    structlog.contextvars.clear_contextvars()


@pytest.mark.unit
class TestBindNotificationContext:
    """Tests for bind_notification_context."""

    def test_binds_and_unbinds(self):
        with bind_notification_context(alert_key="cpu.high", channel="email", notification="ops"):
            ctx = structlog.contextvars.get_contextvars()
            assert ctx["alert_key"] == "cpu.high"
            assert ctx["channel"] == "email"
            assert ctx["notification"] == "ops"

        assert structlog.contextvars.get_contextvars() == {}

    def test_generates_correlation_id(self):
        with bind_notification_context(alert_key="cpu.high"):
            assert get_correlation_id()

        assert get_correlation_id() is None

    def test_explicit_correlation_id(self):
        with bind_notification_context(correlation_id="abc-123"):
            assert get_correlation_id() == "abc-123"

    def test_extra_context(self):
        with bind_notification_context(attempt=2):
            assert structlog.contextvars.get_contextvars()["attempt"] == 2

    def test_unbinds_on_error(self):
        with pytest.raises(RuntimeError):
            with bind_notification_context(alert_key="cpu.high"):
                raise RuntimeError("boom")

        assert "alert_key" not in structlog.contextvars.get_contextvars()
