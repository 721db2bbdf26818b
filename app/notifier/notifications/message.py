"""Outbound email assembly.

Turns an incident and a notification target into an OutboundMessage: a
transport-ready value holding the envelope (sender, merged recipients) and
the RFC 5322 content (subject, text/HTML parts, attachments, headers).

Usage:
    from notifier.notifications.message import build_message

    message = build_message("alerts@example.com", incident, target)
    raw = message.as_bytes()
"""

import socket
from email.message import EmailMessage
from email.policy import SMTP
from email.utils import formatdate, make_msgid
from typing import Any, Dict, List, Mapping, Optional

from pydantic import BaseModel, Field

from notifier.exceptions import MessageValidationError
from notifier.models import Attachment, IncidentState, NotificationTarget, parse_address
from notifier.templates import render_template

HOSTNAME = socket.gethostname()
SERVER_HEADER = "X-Notifier-Server"
MISSING_ENVELOPE = "Must specify at least one From address and one To address"


class OutboundMessage(BaseModel):
    """Email ready to be handed to the SMTP session driver.

    Exists only for the duration of one send.

    Attributes:
        sender: From address, ``addr`` or ``Name <addr>``
        to: To recipients
        cc: Cc recipients
        bcc: Bcc recipients (never written to headers)
        subject: Subject header
        text: Plain-text part
        html: HTML part
        attachments: Binary attachments, in order
        headers: Extra headers
    """

    sender: str
    to: List[str] = Field(default_factory=list)
    cc: List[str] = Field(default_factory=list)
    bcc: List[str] = Field(default_factory=list)
    subject: str = ""
    text: Optional[str] = None
    html: Optional[str] = None
    attachments: List[Attachment] = Field(default_factory=list)
    headers: Dict[str, str] = Field(default_factory=dict)

    @property
    def recipients(self) -> List[str]:
        """To, Cc and Bcc merged in order, duplicates retained."""
        return [*self.to, *self.cc, *self.bcc]

    def validate_envelope(self) -> str:
        """Check the envelope precondition and parse every address.

        Returns:
            The bare sender address for MAIL FROM.

        Raises:
            MessageValidationError: If the sender is empty, there are no
                recipients, or any address is malformed.
        """
        if not self.sender or not self.recipients:
            raise MessageValidationError(MISSING_ENVELOPE)
        _, sender = parse_address(self.sender)
        for recipient in self.recipients:
            parse_address(recipient)
        return sender

    def to_email_message(self) -> EmailMessage:
        """Render the message as an ``email.message.EmailMessage``."""
        msg = EmailMessage(policy=SMTP)
        msg["From"] = self.sender
        if self.to:
            msg["To"] = ", ".join(self.to)
        if self.cc:
            msg["Cc"] = ", ".join(self.cc)
        msg["Subject"] = self.subject
        msg["Date"] = formatdate(localtime=True)
        msg["Message-ID"] = make_msgid(domain=HOSTNAME)
        for name, value in self.headers.items():
            msg[name] = value

        if self.text is not None:
            msg.set_content(self.text)
            if self.html:
                msg.add_alternative(self.html, subtype="html")
        elif self.html:
            msg.set_content(self.html, subtype="html")
        else:
            msg.set_content("")

        for attachment in self.attachments:
            maintype, _, subtype = attachment.content_type.partition("/")
            if not maintype or not subtype:
                maintype, subtype = "application", "octet-stream"
            msg.add_attachment(
                attachment.data,
                maintype=maintype,
                subtype=subtype,
                filename=attachment.filename,
            )
        return msg

    def as_bytes(self) -> bytes:
        """Serialize to wire format with CRLF line endings."""
        return self.to_email_message().as_bytes(policy=SMTP)


def incident_context(incident: IncidentState) -> Dict[str, Any]:
    """Template context exposing every incident field plus the incident."""
    context: Dict[str, Any] = {
        name: getattr(incident, name) for name in type(incident).model_fields
    }
    context["incident"] = incident
    return context


def render_payload(incident: IncidentState, target: NotificationTarget) -> str:
    """Select the payload for a notification.

    Without a body template the raw subject, or the raw body when
    ``use_body`` is set, is returned verbatim. With a template, it is
    rendered with either the full incident (``use_full_context``) or the
    selected string as ``payload``.

    Raises:
        TemplateRenderError: If the template fails to render.
    """
    payload = incident.body if target.use_body else incident.subject
    if target.body is None:
        return payload

    context: Mapping[str, Any]
    if target.use_full_context:
        context = incident_context(incident)
    else:
        context = {"payload": payload}
    return render_template(target.body, context)


def _single_line(value: str) -> str:
    # header values may not contain line breaks
    return " ".join(value.splitlines())


def build_message(
    sender: str,
    incident: IncidentState,
    target: NotificationTarget,
    headers: Optional[Mapping[str, str]] = None,
) -> OutboundMessage:
    """Assemble the email for an incident.

    Args:
        sender: From address.
        incident: Incident being reported.
        target: Notification target supplying recipients and payload options.
        headers: Extra headers, added after ``X-Notifier-Server``.

    Returns:
        OutboundMessage with the payload as text part and the incident's
        email body as HTML part.

    Raises:
        MessageValidationError: Missing sender/recipients or malformed address.
        TemplateRenderError: The body template failed to render.
    """
    message = OutboundMessage(
        sender=sender,
        to=list(target.email),
        cc=list(target.email_cc),
        bcc=list(target.email_bcc),
        subject=_single_line(incident.email_subject or incident.subject),
        html=incident.email_body or None,
        attachments=list(incident.attachments),
        headers={SERVER_HEADER: HOSTNAME, **(headers or {})},
    )
    message.validate_envelope()
    message.text = render_payload(incident, target)
    return message
