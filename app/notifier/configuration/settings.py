"""Top-level notifier settings."""

from functools import lru_cache

from notifier.configuration.base import NotifierBaseSettings
from notifier.configuration.notifications import NotificationSettings
from notifier.configuration.smtp import SMTPSettings


class Settings(NotifierBaseSettings):
    """All notifier settings, one attribute per section.

    Environment Variables:
        PREFIX: Deployment prefix; empty means production
        LOG_LEVEL: Minimum level of emitted log events

    Example:
        settings = get_settings()
        relay = settings.smtp.SMTP_HOST
        workers = settings.notifications.NOTIFY_MAX_WORKERS
    """

    PREFIX: str = ""
    LOG_LEVEL: str = "INFO"

    smtp: SMTPSettings
    notifications: NotificationSettings

    def __init__(self, **kwargs):
        # sections not passed explicitly load from the environment
        sections = {
            "smtp": SMTPSettings,
            "notifications": NotificationSettings,
        }
        for name, section in sections.items():
            if name not in kwargs:
                kwargs[name] = section()
        super().__init__(**kwargs)

    @property
    def is_production(self) -> bool:
        """True when no deployment prefix is set."""
        return not self.PREFIX


@lru_cache
def get_settings() -> Settings:
    """Process-wide settings, loaded once."""
    return Settings()
