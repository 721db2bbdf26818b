"""Configuration module - public API.

Centralized configuration management using Pydantic BaseSettings with
per-concern organization, plus loading of notification targets.

Exports:
    get_settings: Cached Settings provider
    Settings: Main settings class (for testing/overrides)
    SMTPSettings: Mail relay settings
    NotificationSettings: Dispatcher settings
    load_targets: Build NotificationTarget models from raw mappings
    ConfigurationError: Raised for invalid target definitions
"""

from notifier.configuration.settings import Settings, get_settings
from notifier.configuration.smtp import SMTPSettings
from notifier.configuration.notifications import NotificationSettings
from notifier.configuration.targets import ConfigurationError, load_targets

__all__ = [
    "Settings",
    "get_settings",
    "SMTPSettings",
    "NotificationSettings",
    "ConfigurationError",
    "load_targets",
]
