"""Unit tests for the email counters."""

import threading

import pytest
from prometheus_client import CollectorRegistry

from notifier.notifications.metrics import EmailMetrics, PrometheusEmailMetrics


@pytest.mark.unit
class TestPrometheusEmailMetrics:
    """Tests for PrometheusEmailMetrics."""

    def test_counters_start_at_zero(self, metrics):
        assert metrics.sent_total == 0.0
        assert metrics.failed_total == 0.0

    def test_record_sent(self, metrics):
        metrics.record_sent()
        metrics.record_sent()

        assert metrics.sent_total == 2.0
        assert metrics.failed_total == 0.0

    def test_record_failed(self, metrics):
        metrics.record_failed()

        assert metrics.sent_total == 0.0
        assert metrics.failed_total == 1.0

    def test_metric_names_use_namespace(self):
        registry = CollectorRegistry()
        metrics = PrometheusEmailMetrics(namespace="alerting", registry=registry)

        metrics.record_sent()
        metrics.record_failed()

        assert registry.get_sample_value("alerting_email_sent_total") == 1.0
        assert registry.get_sample_value("alerting_email_sent_failed_total") == 1.0

    def test_instances_are_independent(self):
        first = PrometheusEmailMetrics()
        second = PrometheusEmailMetrics()

        first.record_sent()

        assert first.sent_total == 1.0
        assert second.sent_total == 0.0

    def test_is_email_metrics(self, metrics):
        assert isinstance(metrics, EmailMetrics)

    def test_concurrent_updates_are_not_lost(self, metrics):
        threads_count, per_thread = 8, 500

        def record():
            for _ in range(per_thread):
                metrics.record_sent()
                metrics.record_failed()

        threads = [threading.Thread(target=record) for _ in range(threads_count)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert metrics.sent_total == threads_count * per_thread
        assert metrics.failed_total == threads_count * per_thread
