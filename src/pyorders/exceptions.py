"""Custom exception hierarchy for pyorders."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyorders.validation import RangeProblem


class OrdersError(Exception):
    """Base exception for all pyorders errors."""


class OrdersConfigError(OrdersError):
    """Invalid or missing configuration."""


class OrdersAuthError(OrdersError):
    """No bearer credential available, or the server rejected it.

    Raised *before* any network traffic when the client has no token, and
    for HTTP 401/403 responses.  Never retried automatically.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class OrdersNetworkError(OrdersError):
    """Transport-level failure (connection refused, DNS, timeout)."""

    def __init__(self, message: str, *, endpoint: str = "") -> None:
        self.endpoint = endpoint
        super().__init__(message)


class OrdersServerError(OrdersError):
    """Server answered with a non-2xx status or an unreadable body.

    ``str(exc)`` is the server-supplied message when the body carried one.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: int | None = None,
        endpoint: str = "",
    ) -> None:
        self.status_code = status_code
        self.endpoint = endpoint
        super().__init__(message)


class OrdersValidationError(OrdersError):
    """Client-side precondition failed; nothing was sent over the wire."""

    def __init__(self, message: str, *, reason: RangeProblem | None = None) -> None:
        self.reason = reason
        super().__init__(message)


class OrdersDeliveryError(OrdersError):
    """The exported file could not be materialized."""
