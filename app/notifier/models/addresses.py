"""Mail address parsing."""

from email.errors import HeaderParseError
from email.headerregistry import Address
from email.utils import parseaddr
from typing import Tuple

from notifier.exceptions import MessageValidationError


def parse_address(value: str) -> Tuple[str, str]:
    """Parse a mail address, accepting the ``Name <addr@host>`` form.

    Only RFC 5322 syntax is checked. Hosts without a dot and internal
    names (``bosun@localhost``, ``ops@corp.local``) are valid.

    Args:
        value: Address as written in configuration.

    Returns:
        Tuple of (display name, bare address).

    Raises:
        MessageValidationError: If the value is not a valid mail address.
    """
    name, addr = parseaddr(value)
    try:
        address = Address(addr_spec=addr)
    except (HeaderParseError, ValueError, IndexError) as e:
        raise MessageValidationError(f"invalid mail address {value!r}: {e}") from e
    if not address.username or not address.domain:
        raise MessageValidationError(f"invalid mail address {value!r}: missing local part or domain")
    return name, address.addr_spec
