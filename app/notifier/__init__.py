"""Incident notifier.

Fans incident alerts out to email, HTTP and console channels.
"""

__version__ = "0.1.0"
