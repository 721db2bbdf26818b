"""Error classifiers for delivery exceptions.

Converts exceptions raised while building or sending a notification into
OperationResult objects. The SMTP session driver raises errors verbatim;
classification happens only at the channel boundary, for logs and results.

Usage:
    from notifier.operations.classifiers import classify_delivery_error

    try:
        send_message(message, relay, username, password)
    except Exception as exc:
        result = classify_delivery_error(exc)
"""

import smtplib

from notifier.exceptions import MessageValidationError, TemplateRenderError
from notifier.operations.result import OperationResult


def classify_delivery_error(exc: Exception) -> OperationResult:
    """Classify a delivery exception into OperationResult.

    Mapping:
    - MessageValidationError: PERMANENT_ERROR / VALIDATION_ERROR
    - TemplateRenderError: PERMANENT_ERROR / TEMPLATE_ERROR
    - SMTPConnectError, SMTPHeloError: TRANSIENT_ERROR / TRANSPORT_ERROR
    - Other relay rejections: PERMANENT_ERROR / PROTOCOL_REJECTED
    - Disconnects, TLS and socket errors: TRANSIENT_ERROR / TRANSPORT_ERROR
    - Anything else: PERMANENT_ERROR / UNKNOWN_ERROR

    Args:
        exc: Exception raised by the builder, the session driver or an
            HTTP request

    Returns:
        OperationResult with status, message and error_code
    """
    if isinstance(exc, MessageValidationError):
        return OperationResult.permanent_error(str(exc), error_code="VALIDATION_ERROR")

    if isinstance(exc, TemplateRenderError):
        return OperationResult.permanent_error(str(exc), error_code="TEMPLATE_ERROR")

    # Connect and greet failures carry a reply code but are transport problems
    if isinstance(exc, (smtplib.SMTPConnectError, smtplib.SMTPHeloError)):
        return OperationResult.transient_error(
            f"relay unavailable: {exc}", error_code="TRANSPORT_ERROR"
        )

    if isinstance(
        exc,
        (
            smtplib.SMTPResponseException,
            smtplib.SMTPRecipientsRefused,
            smtplib.SMTPNotSupportedError,
        ),
    ):
        return OperationResult.permanent_error(
            f"relay rejected message: {exc}", error_code="PROTOCOL_REJECTED"
        )

    # SMTPServerDisconnected, ssl.SSLError, socket errors, requests errors
    if isinstance(exc, OSError):
        return OperationResult.transient_error(
            f"transport error: {type(exc).__name__}: {exc}",
            error_code="TRANSPORT_ERROR",
        )

    return OperationResult.permanent_error(
        f"unexpected error: {type(exc).__name__}: {exc}", error_code="UNKNOWN_ERROR"
    )
