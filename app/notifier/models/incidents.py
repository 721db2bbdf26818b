"""Incident state consumed by the notification channels."""

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class Attachment(BaseModel):
    """Binary attachment carried by an incident email."""

    model_config = ConfigDict(frozen=True)

    filename: str
    content_type: str = "application/octet-stream"
    data: bytes


class IncidentState(BaseModel):
    """The event being reported.

    Owned by the caller and read-only to the notifier. ``alert_key`` is
    an opaque correlation identifier used for logging only.

    Attributes:
        alert_key: Correlation identifier, e.g. ``cpu.high{host=web01}``
        subject: Short plain-text subject
        body: Plain-text body
        email_subject: Subject line used for email notifications
        email_body: HTML body used for email notifications
        attachments: Ordered list of email attachments
        id: Incident identifier (template context only)
        alert: Alert name (template context only)
        tags: Alert tags (template context only)
        current_status: Current status such as ``warning`` or ``critical``
        start: Time the incident opened
    """

    model_config = ConfigDict(frozen=True)

    alert_key: str
    subject: str = ""
    body: str = ""
    email_subject: str = ""
    email_body: str = ""
    attachments: List[Attachment] = Field(default_factory=list)
    id: Optional[int] = None
    alert: str = ""
    tags: Dict[str, str] = Field(default_factory=dict)
    current_status: str = "normal"
    start: Optional[datetime] = None
