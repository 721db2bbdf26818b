"""Notification channel implementations."""

from notifier.notifications.channels.base import NotificationChannel
from notifier.notifications.channels.console import ConsoleChannel
from notifier.notifications.channels.email import EmailChannel
from notifier.notifications.channels.http import GetChannel, HTTPChannel, PostChannel

__all__ = [
    "NotificationChannel",
    "ConsoleChannel",
    "EmailChannel",
    "GetChannel",
    "HTTPChannel",
    "PostChannel",
]
