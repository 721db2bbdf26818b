"""Notification dispatch settings."""

from pydantic import Field

from notifier.configuration.base import NotifierBaseSettings


class NotificationSettings(NotifierBaseSettings):
    """Dispatcher and HTTP channel configuration.

    Environment Variables:
        NOTIFY_MAX_WORKERS: Cap on concurrent channel tasks (default: unset,
            one thread per task so a hung relay only holds its own task)
        HTTP_TIMEOUT: Timeout in seconds for POST/GET notifications
            (default: unset, no deadline)
        METRICS_NAMESPACE: Prefix of the email counters (default: notifier)
    """

    NOTIFY_MAX_WORKERS: int | None = Field(default=None, alias="NOTIFY_MAX_WORKERS", ge=1)
    HTTP_TIMEOUT: float | None = Field(default=None, alias="HTTP_TIMEOUT")
    METRICS_NAMESPACE: str = Field(default="notifier", alias="METRICS_NAMESPACE")
