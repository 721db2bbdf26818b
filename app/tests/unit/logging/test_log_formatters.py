"""Unit tests for the structlog processors."""

import pytest

from notifier.logging.formatters import (
    add_service_info,
    mask_sensitive_data,
    truncate_large_values,
)


@pytest.mark.unit
class TestMaskSensitiveData:
    """Tests for mask_sensitive_data."""

    def test_masks_credentials(self):
        processor = mask_sensitive_data()

        result = processor(
            None,
            "info",
            {"event": "smtp_login", "smtp_password": "hunter2", "api_key": "k", "host": "x"},
        )

        assert result["smtp_password"] == "***REDACTED***"
        assert result["api_key"] == "***REDACTED***"
        assert result["host"] == "x"
        assert result["event"] == "smtp_login"

    def test_case_insensitive(self):
        result = mask_sensitive_data()(None, "info", {"SMTP_PASSWORD": "hunter2"})

        assert result["SMTP_PASSWORD"] == "***REDACTED***"

    def test_none_left_alone(self):
        result = mask_sensitive_data()(None, "info", {"password": None})

        assert result["password"] is None

    def test_username_not_masked(self):
        result = mask_sensitive_data()(None, "info", {"username": "notifier"})

        assert result["username"] == "notifier"

    def test_additional_patterns(self):
        processor = mask_sensitive_data(mask_value="x", additional_patterns=frozenset({"recipients"}))

        result = processor(None, "info", {"recipients": ["a@example.com"]})

        assert result["recipients"] == "x"


@pytest.mark.unit
class TestOtherProcessors:
    """Tests for the remaining processors."""

    def test_truncate_large_values(self):
        result = truncate_large_values(max_length=5)(None, "info", {"payload": "abcdefgh", "n": 1})

        assert result["payload"] == "abcde...[truncated, 8 chars total]"
        assert result["n"] == 1

    def test_short_values_untouched(self):
        result = truncate_large_values(max_length=5)(None, "info", {"payload": "abc"})

        assert result["payload"] == "abc"

    def test_add_service_info(self):
        result = add_service_info("notifier", "0.1.0", "staging")(None, "info", {"event": "x"})

        assert result == {
            "event": "x",
            "service": "notifier",
            "version": "0.1.0",
            "environment": "staging",
        }

    def test_service_info_keeps_existing_keys(self):
        result = add_service_info("notifier", "0.1.0", "staging")(None, "info", {"version": "2"})

        assert result["version"] == "2"
