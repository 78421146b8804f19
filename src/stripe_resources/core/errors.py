"""
Exception hierarchy for the resource-access layer.

Everything raised on purpose derives from :class:`StripeError`, except
:class:`RequestError`, which signals a local programming mistake (a malformed
path or an empty identifier) that retrying can never fix.
"""

from __future__ import annotations

from typing import Any, Dict, Mapping, Optional

from .enums import ApiEnum

__all__ = [
    "ApiError",
    "AuthenticationError",
    "CardError",
    "DecodeError",
    "EncodingError",
    "ErrorType",
    "IdempotencyError",
    "InvalidCursor",
    "InvalidRequestError",
    "RateLimitError",
    "RequestError",
    "StripeError",
    "TransportError",
]


class ErrorType(ApiEnum):
    """Classification carried in the ``type`` field of an error envelope."""

    API = "api_error"
    API_CONNECTION = "api_connection_error"
    AUTHENTICATION = "authentication_error"
    CARD = "card_error"
    IDEMPOTENCY = "idempotency_error"
    INVALID_REQUEST = "invalid_request_error"
    RATE_LIMIT = "rate_limit_error"


class StripeError(Exception):
    """Base exception for all library errors."""


class TransportError(StripeError):
    """The transport could not complete the HTTP exchange."""


class DecodeError(StripeError):
    """The response body did not have the expected shape."""


class InvalidCursor(StripeError):
    """A pagination cursor could not be derived from the current page."""


class EncodingError(StripeError):
    """Request parameters cannot be expressed in the wire encoding."""


class RequestError(Exception):
    """A request was built incorrectly by the calling code."""


class ApiError(StripeError):
    """
    The server answered with a structured error envelope.

    Subclasses exist for the classified envelope types; anything else
    (``api_error``, ``api_connection_error`` or an unknown type) is raised as
    a plain :class:`ApiError`.
    """

    def __init__(
        self,
        message: str,
        *,
        status_code: Optional[int] = None,
        error_type: Optional[ErrorType] = None,
        code: Optional[str] = None,
        param: Optional[str] = None,
        decline_code: Optional[str] = None,
        doc_url: Optional[str] = None,
        raw: Optional[Mapping[str, Any]] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.error_type = error_type
        self.code = code
        self.param = param
        self.decline_code = decline_code
        self.doc_url = doc_url
        self.raw: Dict[str, Any] = dict(raw or {})

    def __str__(self) -> str:
        prefix = f"({self.status_code}) " if self.status_code is not None else ""
        if self.code:
            return f"{prefix}{self.message} [{self.code}]"
        return f"{prefix}{self.message}"

    @classmethod
    def from_envelope(
        cls,
        status_code: Optional[int],
        envelope: Mapping[str, Any],
    ) -> "ApiError":
        """
        Build the matching :class:`ApiError` subclass from an ``error`` object.
        """
        raw_type = envelope.get("type")
        error_type = ErrorType(raw_type) if isinstance(raw_type, str) else None
        error_cls = _ERROR_CLASSES.get(error_type, ApiError) if error_type else ApiError

        message = envelope.get("message")
        if not isinstance(message, str) or not message:
            message = f"API request failed with status {status_code}"

        return error_cls(
            message,
            status_code=status_code,
            error_type=error_type,
            code=_optional_str(envelope.get("code")),
            param=_optional_str(envelope.get("param")),
            decline_code=_optional_str(envelope.get("decline_code")),
            doc_url=_optional_str(envelope.get("doc_url")),
            raw=envelope,
        )


class AuthenticationError(ApiError):
    """The secret key was missing, invalid or revoked."""


class RateLimitError(ApiError):
    """Too many requests hit the API too quickly."""


class InvalidRequestError(ApiError):
    """The request had invalid parameters or targeted a missing resource."""


class IdempotencyError(ApiError):
    """An idempotency key was reused with different parameters."""


class CardError(ApiError):
    """The card or payment method could not be processed."""


_ERROR_CLASSES = {
    ErrorType.AUTHENTICATION: AuthenticationError,
    ErrorType.RATE_LIMIT: RateLimitError,
    ErrorType.INVALID_REQUEST: InvalidRequestError,
    ErrorType.IDEMPOTENCY: IdempotencyError,
    ErrorType.CARD: CardError,
}


def _optional_str(value: Any) -> Optional[str]:
    if value is None:
        return None
    return str(value)
