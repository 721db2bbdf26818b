"""Email delivery counters.

The dispatcher receives a metrics handle instead of touching process-wide
state. ``PrometheusEmailMetrics`` backs the handle with prometheus_client
counters, which are safe to increment from any number of channel tasks.

Usage:
    from prometheus_client import CollectorRegistry
    from notifier.notifications.metrics import PrometheusEmailMetrics

    metrics = PrometheusEmailMetrics(registry=CollectorRegistry())
    metrics.record_sent()
"""

from abc import ABC, abstractmethod
from typing import Optional

from prometheus_client import CollectorRegistry, Counter


class EmailMetrics(ABC):
    """Counter handle incremented once per terminal email outcome."""

    @abstractmethod
    def record_sent(self) -> None:
        """Count one email relayed successfully."""
        pass

    @abstractmethod
    def record_failed(self) -> None:
        """Count one email that could not be sent."""
        pass


class PrometheusEmailMetrics(EmailMetrics):
    """EmailMetrics backed by prometheus_client counters.

    Exposes ``<namespace>_email_sent_total`` and
    ``<namespace>_email_sent_failed_total``.

    Args:
        namespace: Metric name prefix.
        registry: Registry to register the counters in. A private registry
            is created when omitted so that several instances can coexist.
    """

    def __init__(
        self,
        namespace: str = "notifier",
        registry: Optional[CollectorRegistry] = None,
    ):
        self.namespace = namespace
        self.registry = registry if registry is not None else CollectorRegistry()
        self._sent = Counter(
            "email_sent",
            "The number of email notifications sent.",
            namespace=namespace,
            registry=self.registry,
        )
        self._failed = Counter(
            "email_sent_failed",
            "The number of email notifications that failed to send.",
            namespace=namespace,
            registry=self.registry,
        )

    def record_sent(self) -> None:
        self._sent.inc()

    def record_failed(self) -> None:
        self._failed.inc()

    @property
    def sent_total(self) -> float:
        """Current value of the sent counter."""
        return self._sample("email_sent_total")

    @property
    def failed_total(self) -> float:
        """Current value of the failed counter."""
        return self._sample("email_sent_failed_total")

    def _sample(self, name: str) -> float:
        value = self.registry.get_sample_value(f"{self.namespace}_{name}")
        return value or 0.0
