"""Loading of notification targets from raw configuration."""

from typing import Any, Dict, Mapping

from pydantic import ValidationError

from notifier.models.targets import NotificationTarget


class ConfigurationError(RuntimeError):
    """Raised when a notification target definition is invalid."""


def load_target(name: str, data: Mapping[str, Any]) -> NotificationTarget:
    """Build a single NotificationTarget.

    Args:
        name: Notification name; overrides any ``name`` key in ``data``.
        data: Raw mapping, e.g. one table of a TOML or JSON document.

    Returns:
        Frozen NotificationTarget.

    Raises:
        ConfigurationError: If the definition does not validate.
    """
    try:
        return NotificationTarget.model_validate({**data, "name": name})
    except ValidationError as exc:
        raise ConfigurationError(f"invalid notification {name!r}: {exc}") from exc


def load_targets(data: Mapping[str, Mapping[str, Any]]) -> Dict[str, NotificationTarget]:
    """Build NotificationTargets keyed by name.

    Example:
        targets = load_targets({
            "ops": {"email": ["ops@example.com"], "print": True},
            "hook": {"post": "https://hooks.example.com/alerts"},
        })
    """
    targets = {}
    for name, raw in data.items():
        if not isinstance(raw, Mapping):
            raise ConfigurationError(f"notification {name!r} must be a mapping")
        targets[name] = load_target(name, raw)
    return targets
