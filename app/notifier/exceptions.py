"""Exception hierarchy for the notifier."""


class NotifierError(Exception):
    """Base class for notifier errors."""


class MessageValidationError(NotifierError):
    """Raised when an outbound message fails its envelope precondition.

    Covers a missing sender, an empty recipient set and malformed
    addresses. Always raised before any network I/O.
    """


class TemplateRenderError(NotifierError):
    """Raised when a notification body template cannot be rendered."""
