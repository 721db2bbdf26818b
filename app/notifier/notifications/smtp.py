"""SMTP session driver.

Drives one conversation with a mail relay:

1. Connect to ``host:port``
2. Greet as ``localhost``
3. Upgrade to TLS when the relay advertises STARTTLS
4. Authenticate (PLAIN) when upgraded and credentials are configured;
   failure is reported and the session continues unauthenticated
5. MAIL FROM, then RCPT TO per recipient; the first rejection aborts
6. DATA with the raw message
7. QUIT

The connection is closed exactly once on every exit path. Errors are
raised as they come from ``smtplib`` or the socket layer; classification
is left to the caller.

Usage:
    from notifier.notifications.smtp import send_message

    send_message(message, "mail.example.com:587", "user", "secret")
"""

import smtplib
import ssl
from typing import Callable, Optional, Sequence, Tuple

from notifier.logging import get_module_logger
from notifier.notifications.message import OutboundMessage
from notifier.operations import OperationResult

logger = get_module_logger()

DEFAULT_PORT = 25
LOCAL_HOSTNAME = "localhost"


def split_relay_address(relay_address: str) -> Tuple[str, int]:
    """Split ``host:port`` into its parts.

    Bracketed IPv6 literals (``[::1]:25``) are supported. The port
    defaults to 25.

    Raises:
        ValueError: If the port is not a number.
    """
    host, sep, port = relay_address.rpartition(":")
    if not sep or (":" in host and not host.startswith("[")):
        return relay_address.strip("[]"), DEFAULT_PORT
    if not port.isdigit():
        raise ValueError(f"invalid relay address: {relay_address!r}")
    return host.strip("[]"), int(port)


def _tls_context(verify_server_certificate: bool) -> ssl.SSLContext:
    context = ssl.create_default_context()
    if not verify_server_certificate:
        context.check_hostname = False
        context.verify_mode = ssl.CERT_NONE
    return context


def _start_tls(client: smtplib.SMTP, verify_server_certificate: bool) -> None:
    code, reply = client.starttls(context=_tls_context(verify_server_certificate))
    if code != 220:
        raise smtplib.SMTPResponseException(code, reply)
    # extensions advertised before the upgrade are discarded
    client.ehlo_or_helo_if_needed()


def _authenticate(
    client: smtplib.SMTP, host: str, username: str, password: str
) -> OperationResult:
    """Best-effort PLAIN authentication scoped to ``host``.

    Returns:
        OperationResult: SUCCESS, or UNAUTHORIZED when the relay refused
        the credentials or the exchange failed.
    """
    client.user, client.password = username, password
    try:
        code, _ = client.auth("PLAIN", client.auth_plain)
    except smtplib.SMTPException as e:
        return OperationResult.unauthorized(
            f"authentication with {host} failed: {e}"
        )
    return OperationResult.success(
        data={"host": host, "code": code}, message="authenticated"
    )


def send_mail(
    relay_address: str,
    username: str,
    password: str,
    sender: str,
    recipients: Sequence[str],
    raw_message: bytes,
    *,
    verify_server_certificate: bool = False,
    timeout: Optional[float] = None,
    client_factory: Optional[Callable[..., smtplib.SMTP]] = None,
) -> None:
    """Deliver ``raw_message`` through the relay at ``relay_address``.

    Args:
        relay_address: Relay as ``host:port``.
        username: Username for PLAIN authentication, may be empty.
        password: Password for PLAIN authentication, may be empty.
        sender: Bare envelope sender address.
        recipients: Bare envelope recipient addresses, in order.
        raw_message: Complete RFC 5322 message.
        verify_server_certificate: Verify the relay certificate on STARTTLS.
        timeout: Socket timeout in seconds; None imposes no deadline.
        client_factory: Called as ``factory(host, port, local_hostname=...,
            timeout=...)``; defaults to ``smtplib.SMTP``.

    Raises:
        OSError: Connection, TLS or transfer failure, including every
            ``smtplib.SMTPException`` for relay rejections.
    """
    host, port = split_relay_address(relay_address)
    factory = client_factory or smtplib.SMTP
    options = {"local_hostname": LOCAL_HOSTNAME}
    if timeout is not None:
        options["timeout"] = timeout

    # connects and reads the greeting, raising SMTPConnectError unless 220
    client = factory(host, port, **options)
    try:
        client.ehlo_or_helo_if_needed()

        if client.has_extn("starttls"):
            _start_tls(client, verify_server_certificate)
            logger.debug("smtp_tls_started", host=host, port=port)
            if username or password:
                auth_result = _authenticate(client, host, username, password)
                if not auth_result.is_success:
                    logger.warning(
                        "smtp_authentication_failed",
                        host=host,
                        username=username,
                        error=auth_result.message,
                    )

        code, reply = client.mail(sender)
        if code != 250:
            raise smtplib.SMTPSenderRefused(code, reply, sender)
        for recipient in recipients:
            code, reply = client.rcpt(recipient)
            if code not in (250, 251):
                raise smtplib.SMTPRecipientsRefused({recipient: (code, reply)})

        code, reply = client.data(raw_message)
        if code != 250:
            raise smtplib.SMTPDataError(code, reply)

        code, reply = client.quit()
        if code != 221:
            raise smtplib.SMTPResponseException(code, reply)
    finally:
        client.close()

    logger.debug(
        "smtp_message_delivered",
        host=host,
        port=port,
        recipient_count=len(recipients),
        message_bytes=len(raw_message),
    )


def send_message(
    message: OutboundMessage,
    relay_address: str,
    username: str = "",
    password: str = "",
    **options,
) -> None:
    """Validate, serialize and deliver an OutboundMessage.

    To, Cc and Bcc are merged into one envelope, in order and with
    duplicates retained. The envelope precondition is checked before any
    connection is attempted.

    Args:
        message: Message to deliver.
        relay_address: Relay as ``host:port``.
        username: Optional PLAIN username.
        password: Optional PLAIN password.
        **options: Passed through to :func:`send_mail`.

    Raises:
        MessageValidationError: Missing sender/recipients or malformed address.
        OSError: See :func:`send_mail`.
    """
    sender = message.validate_envelope()
    send_mail(
        relay_address,
        username,
        password,
        sender,
        message.recipients,
        message.as_bytes(),
        **options,
    )
