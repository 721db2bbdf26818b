"""Mail relay settings."""

from pydantic import Field

from notifier.configuration.base import NotifierBaseSettings


class SMTPSettings(NotifierBaseSettings):
    """SMTP relay configuration used by the email channel.

    Environment Variables:
        EMAIL_FROM: Sender address for outgoing notifications
        SMTP_HOST: Relay address as ``host:port`` (port defaults to 25)
        SMTP_USERNAME: Optional username for PLAIN authentication
        SMTP_PASSWORD: Optional password for PLAIN authentication
        SMTP_VERIFY_SERVER_CERTIFICATE: Verify the relay certificate during
            STARTTLS (default: False, the relay is trusted by network placement)
        SMTP_TIMEOUT: Socket timeout in seconds for the whole session
            (default: unset, no deadline)

    Example:
        ```python
        from notifier.configuration import get_settings

        settings = get_settings()

        relay = settings.smtp.SMTP_HOST
        sender = settings.smtp.EMAIL_FROM
        ```
    """

    EMAIL_FROM: str = Field(default="", alias="EMAIL_FROM")
    SMTP_HOST: str = Field(default="localhost:25", alias="SMTP_HOST")
    SMTP_USERNAME: str = Field(default="", alias="SMTP_USERNAME")
    SMTP_PASSWORD: str = Field(default="", alias="SMTP_PASSWORD")
    SMTP_VERIFY_SERVER_CERTIFICATE: bool = Field(
        default=False, alias="SMTP_VERIFY_SERVER_CERTIFICATE"
    )
    SMTP_TIMEOUT: float | None = Field(default=None, alias="SMTP_TIMEOUT")
