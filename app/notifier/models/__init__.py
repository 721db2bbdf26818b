"""Data models shared by the notifier packages."""

from notifier.models.addresses import parse_address
from notifier.models.incidents import Attachment, IncidentState
from notifier.models.targets import NotificationTarget

__all__ = [
    "Attachment",
    "IncidentState",
    "NotificationTarget",
    "parse_address",
]
