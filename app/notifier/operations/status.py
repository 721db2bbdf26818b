"""Outcome categories for delivery steps."""

from enum import Enum


class OperationStatus(Enum):
    """How a delivery step ended.

    TRANSIENT_ERROR covers failures of the connection itself; sending the
    same message later may succeed. PERMANENT_ERROR covers problems with
    the message or its configuration, and relay rejections.
    """

    SUCCESS = "success"
    TRANSIENT_ERROR = "transient_error"
    PERMANENT_ERROR = "permanent_error"
    UNAUTHORIZED = "unauthorized"
