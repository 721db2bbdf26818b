"""Logging for the notifier, built on structlog.

``configure_logging`` runs on import of :mod:`notifier.logging.setup`.
Modules obtain loggers through ``get_module_logger`` (or
``structlog.get_logger``) and channel tasks wrap their work in
``bind_notification_context``.
"""

from notifier.logging.context import (
    bind_notification_context,
    get_correlation_id,
)
from notifier.logging.formatters import (
    SENSITIVE_PATTERNS,
    add_service_info,
    mask_sensitive_data,
    truncate_large_values,
)
from notifier.logging.setup import configure_logging, get_module_logger

__all__ = [
    "SENSITIVE_PATTERNS",
    "add_service_info",
    "bind_notification_context",
    "configure_logging",
    "get_correlation_id",
    "get_module_logger",
    "mask_sensitive_data",
    "truncate_large_values",
]
