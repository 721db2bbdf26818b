"""Structlog processors used by :func:`notifier.logging.configure_logging`.

Each factory returns a processor with the structlog signature
``(logger, method_name, event_dict) -> event_dict``.
"""

from typing import Any, Callable, Dict, FrozenSet, Optional

EventDict = Dict[str, Any]
Processor = Callable[[Any, str, EventDict], EventDict]

REDACTED = "***REDACTED***"

# Substrings of event keys whose values are never written out
SENSITIVE_PATTERNS: FrozenSet[str] = frozenset(
    {
        "password",
        "passwd",
        "secret",
        "token",
        "api_key",
        "apikey",
        "authorization",
        "credential",
        "private_key",
    }
)


def add_service_info(name: str, version: str, environment: str) -> Processor:
    """Stamp every event with the service name, version and environment.

    Example:
        add_service_info("notifier", "0.1.0", "production")
    """
    service = {"service": name, "version": version, "environment": environment}

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in service.items():
            event_dict.setdefault(key, value)
        return event_dict

    return processor


def mask_sensitive_data(
    mask_value: str = REDACTED,
    additional_patterns: Optional[FrozenSet[str]] = None,
) -> Processor:
    """Replace values of credential-like keys with ``mask_value``.

    Key matching is a case-insensitive substring test against
    :data:`SENSITIVE_PATTERNS` plus ``additional_patterns``. ``None``
    values are kept so that "no password configured" stays visible.
    """
    patterns = SENSITIVE_PATTERNS | (additional_patterns or frozenset())

    def is_sensitive(key: str) -> bool:
        lowered = key.lower()
        return any(pattern in lowered for pattern in patterns)

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        return {
            key: mask_value if value is not None and is_sensitive(key) else value
            for key, value in event_dict.items()
        }

    return processor


def truncate_large_values(max_length: int = 2000) -> Processor:
    """Cut string values longer than ``max_length`` characters.

    Print notifications and failure events carry payloads, and one large
    incident body should not flood the log.
    """

    def processor(logger: Any, method_name: str, event_dict: EventDict) -> EventDict:
        for key, value in list(event_dict.items()):
            if isinstance(value, str) and len(value) > max_length:
                event_dict[key] = f"{value[:max_length]}...[truncated, {len(value)} chars total]"
        return event_dict

    return processor
