"""
Typed bindings for the Stripe REST API.

The most useful names are re-exported here so integrators can
``from stripe_resources import ...`` without navigating the package::

    client = create_client(secret_key="sk_test_...")
    page = PaymentIntent.list(client, PaymentIntentListParams(limit=10))
    for intent in page.auto_paging_iter(client):
        print(intent.id, intent.status)
"""

from .api import create_client
from .core import (
    ApiEnum,
    ApiError,
    AuthenticationError,
    CardError,
    Client,
    ClientConfig,
    ClientParameters,
    ConfigError,
    DecodeError,
    EncodingError,
    ErrorType,
    IdempotencyError,
    Identifiable,
    InvalidCursor,
    InvalidRequestError,
    Metadata,
    PagedList,
    RangeQuery,
    RateLimitError,
    RawResponse,
    RequestError,
    StripeError,
    Timestamp,
    Transport,
    TransportError,
    load_client_config,
)
from .resources import (
    CancellationReason,
    CaptureMethod,
    Charge,
    Currency,
    Customer,
    CustomerListParams,
    CustomerParams,
    Deleted,
    PaymentIntent,
    PaymentIntentCaptureParams,
    PaymentIntentConfirmParams,
    PaymentIntentCreateParams,
    PaymentIntentListParams,
    PaymentIntentStatus,
    PaymentIntentUpdateParams,
    Payout,
    PayoutListParams,
    PayoutParams,
    PayoutStatus,
)

__all__ = (
    "ApiEnum",
    "ApiError",
    "AuthenticationError",
    "CancellationReason",
    "CaptureMethod",
    "CardError",
    "Charge",
    "Client",
    "ClientConfig",
    "ClientParameters",
    "ConfigError",
    "Currency",
    "Customer",
    "CustomerListParams",
    "CustomerParams",
    "DecodeError",
    "Deleted",
    "EncodingError",
    "ErrorType",
    "IdempotencyError",
    "Identifiable",
    "InvalidCursor",
    "InvalidRequestError",
    "Metadata",
    "PagedList",
    "PaymentIntent",
    "PaymentIntentCaptureParams",
    "PaymentIntentConfirmParams",
    "PaymentIntentCreateParams",
    "PaymentIntentListParams",
    "PaymentIntentStatus",
    "PaymentIntentUpdateParams",
    "Payout",
    "PayoutListParams",
    "PayoutParams",
    "PayoutStatus",
    "RangeQuery",
    "RateLimitError",
    "RawResponse",
    "RequestError",
    "StripeError",
    "Timestamp",
    "Transport",
    "TransportError",
    "create_client",
    "load_client_config",
)
