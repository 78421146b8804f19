"""
Typed records and request helpers for the individual API resources.
"""

from .charge import Charge, ChargeStatus
from .currency import Currency
from .customer import Customer, CustomerListParams, CustomerParams, Deleted
from .payment_intent import (
    CancellationReason,
    CaptureMethod,
    ConfirmationMethod,
    PaymentError,
    PaymentIntent,
    PaymentIntentCancelParams,
    PaymentIntentCaptureParams,
    PaymentIntentConfirmParams,
    PaymentIntentCreateParams,
    PaymentIntentListParams,
    PaymentIntentStatus,
    PaymentIntentUpdateParams,
)
from .payout import (
    Payout,
    PayoutFailureCode,
    PayoutListParams,
    PayoutMethod,
    PayoutParams,
    PayoutSourceType,
    PayoutStatus,
    PayoutType,
)
from .shipping import Address, ShippingDetails

__all__ = [
    "Address",
    "CancellationReason",
    "CaptureMethod",
    "Charge",
    "ChargeStatus",
    "ConfirmationMethod",
    "Currency",
    "Customer",
    "CustomerListParams",
    "CustomerParams",
    "Deleted",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentCancelParams",
    "PaymentIntentCaptureParams",
    "PaymentIntentConfirmParams",
    "PaymentIntentCreateParams",
    "PaymentIntentListParams",
    "PaymentIntentStatus",
    "PaymentIntentUpdateParams",
    "Payout",
    "PayoutFailureCode",
    "PayoutListParams",
    "PayoutMethod",
    "PayoutParams",
    "PayoutSourceType",
    "PayoutStatus",
    "PayoutType",
    "ShippingDetails",
]
