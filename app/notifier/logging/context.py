"""Per-task logging context.

Every channel task runs inside :func:`bind_notification_context`, so each
event it logs carries the alert key, channel, notification name and a
correlation id unique to the task.
"""

import uuid
from contextlib import contextmanager
from typing import Any, Dict, Iterator, Optional

import structlog


@contextmanager
def bind_notification_context(
    alert_key: Optional[str] = None,
    channel: Optional[str] = None,
    notification: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra: Any,
) -> Iterator[None]:
    """Bind notification fields to structlog's context variables.

    Fields left as None are not bound. ``correlation_id`` defaults to a
    fresh UUID4. Bound keys are removed again on exit, including on error.

    Example:
        with bind_notification_context(alert_key="cpu.high", channel="email"):
            logger.info("email_relayed")
    """
    fields: Dict[str, Any] = {
        "correlation_id": correlation_id or str(uuid.uuid4()),
        "alert_key": alert_key,
        "channel": channel,
        "notification": notification or None,
        **extra,
    }
    bound = {key: value for key, value in fields.items() if value is not None}

    structlog.contextvars.bind_contextvars(**bound)
    try:
        yield
    finally:
        structlog.contextvars.unbind_contextvars(*bound)


def get_correlation_id() -> Optional[str]:
    """Correlation id of the current task, if any."""
    return structlog.contextvars.get_contextvars().get("correlation_id")
