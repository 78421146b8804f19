"""
Payment intents: records, enumerations, parameters and requests.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Tuple

from ..core import operations
from ..core.client import Transport
from ..core.enums import ApiEnum, decode_enum, decode_optional_enum
from ..core.errors import ErrorType
from ..core.pagination import PagedList
from ..core.params import Metadata, RangeQuery, Timestamp
from ..core.records import (
    optional_bool,
    optional_int,
    optional_object,
    optional_str,
    raw_field,
    required_str,
    str_tuple,
)
from .charge import Charge
from .currency import Currency
from .shipping import ShippingDetails

__all__ = [
    "AuthorizeWithUrl",
    "CancellationReason",
    "CaptureMethod",
    "ConfirmationMethod",
    "NextSourceAction",
    "PaymentError",
    "PaymentIntent",
    "PaymentIntentCancelParams",
    "PaymentIntentCaptureParams",
    "PaymentIntentConfirmParams",
    "PaymentIntentCreateParams",
    "PaymentIntentListParams",
    "PaymentIntentStatus",
    "PaymentIntentUpdateParams",
    "SourceActionType",
    "TransferData",
]

PATH = "/payment_intents"


class PaymentIntentStatus(ApiEnum):
    REQUIRES_SOURCE = "requires_source"
    REQUIRES_CONFIRMATION = "requires_confirmation"
    REQUIRES_SOURCE_ACTION = "requires_source_action"
    PROCESSING = "processing"
    REQUIRES_CAPTURE = "requires_capture"
    CANCELED = "canceled"
    SUCCEEDED = "succeeded"


class CancellationReason(ApiEnum):
    DUPLICATE = "duplicate"
    FRAUDULENT = "fraudulent"
    REQUESTED_BY_CUSTOMER = "requested_by_customer"


class CaptureMethod(ApiEnum):
    AUTOMATIC = "automatic"
    MANUAL = "manual"


class ConfirmationMethod(ApiEnum):
    SECRET = "secret"
    PUBLISHABLE = "publishable"


class SourceActionType(ApiEnum):
    AUTHORIZE_WITH_URL = "authorize_with_url"
    USE_STRIPE_SDK = "use_stripe_sdk"


@dataclass(frozen=True)
class PaymentError:
    """The last error met while confirming or capturing a payment intent."""

    error_type: ErrorType
    charge: Optional[str] = None
    code: Optional[str] = None
    decline_code: Optional[str] = None
    doc_url: Optional[str] = None
    message: Optional[str] = None
    param: Optional[str] = None
    source: Optional[str] = None
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_field(cls, payload: Mapping[str, Any], key: str) -> Optional["PaymentError"]:
        value = optional_object(payload, key)
        if value is None:
            return None
        source = value.get("source")
        return cls(
            error_type=decode_enum(ErrorType, value["type"]),
            charge=optional_str(value, "charge"),
            code=optional_str(value, "code"),
            decline_code=optional_str(value, "decline_code"),
            doc_url=optional_str(value, "doc_url"),
            message=optional_str(value, "message"),
            param=optional_str(value, "param"),
            # the source may come back expanded into a full object
            source=source.get("id") if isinstance(source, dict) else optional_str(value, "source"),
            raw=dict(value),
        )


@dataclass(frozen=True)
class AuthorizeWithUrl:
    return_url: Optional[str] = None
    url: Optional[str] = None


@dataclass(frozen=True)
class NextSourceAction:
    action_type: SourceActionType
    authorize_with_url: Optional[AuthorizeWithUrl] = None
    # opaque to this library; its shape belongs to the browser SDK
    use_stripe_sdk: Optional[Dict[str, Any]] = None
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_field(cls, payload: Mapping[str, Any], key: str) -> Optional["NextSourceAction"]:
        value = optional_object(payload, key)
        if value is None:
            return None
        authorize = optional_object(value, "authorize_with_url")
        return cls(
            action_type=decode_enum(SourceActionType, value["type"]),
            authorize_with_url=(
                AuthorizeWithUrl(
                    return_url=optional_str(authorize, "return_url"),
                    url=optional_str(authorize, "url"),
                )
                if authorize is not None
                else None
            ),
            use_stripe_sdk=optional_object(value, "use_stripe_sdk"),
            raw=dict(value),
        )


@dataclass(frozen=True)
class TransferData:
    destination: Optional[str] = None


@dataclass(frozen=True)
class PaymentIntentCreateParams:
    amount: int
    currency: Currency
    allowed_source_types: Tuple[str, ...] = ()
    application_fee_amount: Optional[int] = None
    capture_method: Optional[CaptureMethod] = None
    confirm: Optional[bool] = None
    customer: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Metadata] = None
    on_behalf_of: Optional[str] = None
    receipt_email: Optional[str] = None
    return_url: Optional[str] = None
    save_source_to_customer: Optional[bool] = None
    shipping: Optional[ShippingDetails] = None
    source: Optional[str] = None
    statement_descriptor: Optional[str] = None
    transfer_data: Optional[TransferData] = None
    transfer_group: Optional[str] = None


@dataclass(frozen=True)
class PaymentIntentUpdateParams:
    amount: Optional[int] = None
    application_fee_amount: Optional[int] = None
    currency: Optional[Currency] = None
    customer: Optional[str] = None
    description: Optional[str] = None
    metadata: Optional[Metadata] = None
    receipt_email: Optional[str] = None
    save_source_to_customer: Optional[bool] = None
    shipping: Optional[ShippingDetails] = None
    source: Optional[str] = None
    transfer_group: Optional[str] = None


@dataclass(frozen=True)
class PaymentIntentConfirmParams:
    receipt_email: Optional[str] = None
    return_url: Optional[str] = None
    save_source_to_customer: Optional[bool] = None
    shipping: Optional[ShippingDetails] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class PaymentIntentCaptureParams:
    amount_to_capture: Optional[int] = None
    application_fee_amount: Optional[int] = None


@dataclass(frozen=True)
class PaymentIntentCancelParams:
    cancellation_reason: Optional[CancellationReason] = None


@dataclass(frozen=True)
class PaymentIntentListParams:
    created: Optional[RangeQuery[Timestamp]] = None
    customer: Optional[str] = None
    ending_before: Optional[str] = None
    limit: Optional[int] = None
    starting_after: Optional[str] = None


def _charges(payload: Mapping[str, Any]) -> Optional[PagedList[Charge]]:
    value = payload.get("charges")
    if value is None:
        return None
    return PagedList.from_response(value, Charge.from_response)


@dataclass(frozen=True)
class PaymentIntent:
    """
    A payment intent as returned by the API.

    Only ``id`` and ``status`` are required on decode; the remaining fields
    default when the server leaves them out.
    """

    id: str
    status: PaymentIntentStatus
    amount: int = 0
    amount_capturable: int = 0
    amount_received: int = 0
    currency: Optional[Currency] = None
    created: Optional[Timestamp] = None
    livemode: bool = False
    allowed_source_types: Tuple[str, ...] = ()
    application: Optional[str] = None
    application_fee_amount: Optional[int] = None
    canceled_at: Optional[Timestamp] = None
    cancellation_reason: Optional[CancellationReason] = None
    capture_method: Optional[CaptureMethod] = None
    charges: Optional[PagedList[Charge]] = field(default=None, compare=False)
    client_secret: Optional[str] = field(default=None, repr=False)
    confirmation_method: Optional[ConfirmationMethod] = None
    customer: Optional[str] = None
    description: Optional[str] = None
    last_payment_error: Optional[PaymentError] = None
    metadata: Metadata = field(default_factory=Metadata)
    next_source_action: Optional[NextSourceAction] = None
    on_behalf_of: Optional[str] = None
    receipt_email: Optional[str] = None
    review: Optional[str] = None
    shipping: Optional[ShippingDetails] = None
    source: Optional[str] = None
    statement_descriptor: Optional[str] = None
    transfer_data: Optional[TransferData] = None
    transfer_group: Optional[str] = None
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "PaymentIntent":
        transfer_data = optional_object(payload, "transfer_data")
        return cls(
            id=required_str(payload, "id"),
            status=decode_enum(PaymentIntentStatus, payload["status"]),
            amount=optional_int(payload, "amount") or 0,
            amount_capturable=optional_int(payload, "amount_capturable") or 0,
            amount_received=optional_int(payload, "amount_received") or 0,
            currency=decode_optional_enum(Currency, payload.get("currency")),
            created=optional_int(payload, "created"),
            livemode=optional_bool(payload, "livemode"),
            allowed_source_types=str_tuple(payload, "allowed_source_types"),
            application=optional_str(payload, "application"),
            application_fee_amount=optional_int(payload, "application_fee_amount"),
            canceled_at=optional_int(payload, "canceled_at"),
            cancellation_reason=decode_optional_enum(
                CancellationReason, payload.get("cancellation_reason")
            ),
            capture_method=decode_optional_enum(CaptureMethod, payload.get("capture_method")),
            charges=_charges(payload),
            client_secret=optional_str(payload, "client_secret"),
            confirmation_method=decode_optional_enum(
                ConfirmationMethod, payload.get("confirmation_method")
            ),
            customer=optional_str(payload, "customer"),
            description=optional_str(payload, "description"),
            last_payment_error=PaymentError.from_field(payload, "last_payment_error"),
            metadata=Metadata.from_response(payload.get("metadata")),
            next_source_action=NextSourceAction.from_field(payload, "next_source_action"),
            on_behalf_of=optional_str(payload, "on_behalf_of"),
            receipt_email=optional_str(payload, "receipt_email"),
            review=optional_str(payload, "review"),
            shipping=ShippingDetails.from_field(payload, "shipping"),
            source=optional_str(payload, "source"),
            statement_descriptor=optional_str(payload, "statement_descriptor"),
            transfer_data=(
                TransferData(destination=optional_str(transfer_data, "destination"))
                if transfer_data is not None
                else None
            ),
            transfer_group=optional_str(payload, "transfer_group"),
            raw=dict(payload),
        )

    @classmethod
    def create(cls, transport: Transport, params: PaymentIntentCreateParams) -> "PaymentIntent":
        return operations.create(transport, PATH, params, cls.from_response)

    @classmethod
    def retrieve(cls, transport: Transport, payment_intent_id: str) -> "PaymentIntent":
        return operations.retrieve(transport, PATH, payment_intent_id, cls.from_response)

    @classmethod
    def update(
        cls,
        transport: Transport,
        payment_intent_id: str,
        params: PaymentIntentUpdateParams,
    ) -> "PaymentIntent":
        return operations.update(transport, PATH, payment_intent_id, params, cls.from_response)

    @classmethod
    def confirm(
        cls,
        transport: Transport,
        payment_intent_id: str,
        params: Optional[PaymentIntentConfirmParams] = None,
    ) -> "PaymentIntent":
        """Confirm that the customer intends to pay with the current or given source."""
        return operations.action(
            transport, PATH, payment_intent_id, "confirm", params, cls.from_response
        )

    @classmethod
    def capture(
        cls,
        transport: Transport,
        payment_intent_id: str,
        params: Optional[PaymentIntentCaptureParams] = None,
    ) -> "PaymentIntent":
        """Capture the funds of an intent whose status is ``requires_capture``."""
        return operations.action(
            transport, PATH, payment_intent_id, "capture", params, cls.from_response
        )

    @classmethod
    def cancel(
        cls,
        transport: Transport,
        payment_intent_id: str,
        reason: Optional[CancellationReason] = None,
    ) -> "PaymentIntent":
        """
        Cancel the intent; with no ``reason`` the request carries no body.
        """
        params = PaymentIntentCancelParams(cancellation_reason=reason)
        return operations.action(
            transport, PATH, payment_intent_id, "cancel", params, cls.from_response
        )

    @classmethod
    def list(
        cls,
        transport: Transport,
        params: Optional[PaymentIntentListParams] = None,
    ) -> "PagedList[PaymentIntent]":
        return operations.list_(transport, PATH, params, cls.from_response)
