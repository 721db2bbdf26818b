"""Notification target definitions."""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, HttpUrl, field_validator

from notifier.exceptions import NotifierError
from notifier.models.addresses import parse_address
from notifier.templates import check_template_syntax

DEFAULT_POST_CONTENT_TYPE = "application/x-www-form-urlencoded"


class NotificationTarget(BaseModel):
    """Configuration of the channels one notification delivers to.

    Immutable once loaded. A channel is active when its fields are set:
    email when any of ``email``/``email_cc``/``email_bcc`` is non-empty,
    post when ``post`` is set, get when ``get`` is set and print when
    ``print`` is true.

    Attributes:
        name: Notification name, used in logs
        email: To recipients (bare addresses after validation)
        email_cc: Cc recipients
        email_bcc: Bcc recipients
        post: URL to POST the payload to
        get: URL to GET when the notification fires
        body: Jinja2 template for the payload
        content_type: Content-Type of the POST request
        print_payload: Log the payload (config key ``print``)
        use_body: Use the incident body instead of the subject as payload
        use_full_context: Render ``body`` with the whole incident as context

    Example:
        target = NotificationTarget(
            name="ops",
            email=["ops@example.com"],
            post="https://hooks.example.com/alerts",
            body='{"text": {{ payload | tojson }}}',
            content_type="application/json",
        )
    """

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    name: str = ""
    email: List[str] = Field(default_factory=list)
    email_cc: List[str] = Field(default_factory=list)
    email_bcc: List[str] = Field(default_factory=list)
    post: Optional[HttpUrl] = None
    get: Optional[HttpUrl] = None
    body: Optional[str] = None
    content_type: str = DEFAULT_POST_CONTENT_TYPE
    print_payload: bool = Field(default=False, alias="print")
    use_body: bool = False
    use_full_context: bool = False

    @field_validator("email", "email_cc", "email_bcc")
    @classmethod
    def validate_addresses(cls, v: List[str]) -> List[str]:
        """Reduce each address to its bare form, rejecting malformed ones."""
        addresses = []
        for value in v:
            try:
                _, address = parse_address(value)
            except NotifierError as e:
                raise ValueError(str(e)) from e
            addresses.append(address)
        return addresses

    @field_validator("body")
    @classmethod
    def validate_body(cls, v: Optional[str]) -> Optional[str]:
        """Reject body templates with invalid syntax at load time."""
        if v is None:
            return v
        try:
            check_template_syntax(v)
        except NotifierError as e:
            raise ValueError(str(e)) from e
        return v

    @field_validator("content_type")
    @classmethod
    def validate_content_type(cls, v: str) -> str:
        """Fall back to the form content type when left blank."""
        return v.strip() or DEFAULT_POST_CONTENT_TYPE

    @property
    def has_email(self) -> bool:
        """Check if any email recipient is configured."""
        return bool(self.email or self.email_cc or self.email_bcc)
