"""
Payouts to a connected bank account or debit card.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core import operations
from ..core.client import Transport
from ..core.enums import ApiEnum, decode_enum, decode_optional_enum
from ..core.pagination import PagedList
from ..core.params import Metadata, RangeQuery, Timestamp
from ..core.records import (
    optional_bool,
    optional_str,
    raw_field,
    required_int,
    required_str,
)
from .currency import Currency

__all__ = [
    "Payout",
    "PayoutFailureCode",
    "PayoutListParams",
    "PayoutMethod",
    "PayoutParams",
    "PayoutSourceType",
    "PayoutStatus",
    "PayoutType",
    "PayoutUpdateParams",
]

PATH = "/payouts"


class PayoutFailureCode(ApiEnum):
    ACCOUNT_CLOSED = "account_closed"
    ACCOUNT_FROZEN = "account_frozen"
    BANK_ACCOUNT_RESTRICTED = "bank_account_restricted"
    BANK_OWNERSHIP_CHANGED = "bank_ownership_changed"
    COULD_NOT_PROCESS = "could_not_process"
    DEBIT_NOT_AUTHORIZED = "debit_not_authorized"
    DECLINED = "declined"
    INSUFFICIENT_FUNDS = "insufficient_funds"
    INVALID_ACCOUNT_NUMBER = "invalid_account_number"
    INCORRECT_ACCOUNT_HOLDER_NAME = "incorrect_account_holder_name"
    INVALID_CURRENCY = "invalid_currency"
    NO_ACCOUNT = "no_account"
    UNSUPPORTED_CARD = "unsupported_card"


class PayoutMethod(ApiEnum):
    STANDARD = "standard"
    INSTANT = "instant"


class PayoutSourceType(ApiEnum):
    CARD = "card"
    BANK_ACCOUNT = "bank_account"
    ALIPAY_ACCOUNT = "alipay_account"


class PayoutStatus(ApiEnum):
    PAID = "paid"
    PENDING = "pending"
    IN_TRANSIT = "in_transit"
    CANCELED = "canceled"
    FAILED = "failed"


class PayoutType(ApiEnum):
    BANK_ACCOUNT = "bank_account"
    CARD = "card"


@dataclass(frozen=True)
class PayoutParams:
    amount: int
    currency: Currency
    description: Optional[str] = None
    destination: Optional[str] = None
    metadata: Optional[Metadata] = None
    method: Optional[PayoutMethod] = None
    source_type: Optional[PayoutSourceType] = None
    statement_descriptor: Optional[str] = None


@dataclass(frozen=True)
class PayoutUpdateParams:
    """Only the metadata of an existing payout can change."""

    metadata: Optional[Metadata] = None


@dataclass(frozen=True)
class PayoutListParams:
    arrival_date: Optional[RangeQuery[Timestamp]] = None
    created: Optional[RangeQuery[Timestamp]] = None
    destination: Optional[str] = None
    ending_before: Optional[str] = None
    limit: Optional[int] = None
    starting_after: Optional[str] = None
    status: Optional[PayoutStatus] = None


@dataclass(frozen=True)
class Payout:
    id: str
    amount: int
    arrival_date: Timestamp
    created: Timestamp
    currency: Currency
    status: PayoutStatus
    method: PayoutMethod
    payout_type: PayoutType
    livemode: bool = False
    balance_transaction: Optional[str] = None
    description: Optional[str] = None
    destination: Optional[str] = None
    failure_balance_transaction: Optional[str] = None
    failure_code: Optional[PayoutFailureCode] = None
    failure_message: Optional[str] = None
    source_type: Optional[PayoutSourceType] = None
    statement_descriptor: Optional[str] = None
    metadata: Metadata = field(default_factory=Metadata)
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Payout":
        return cls(
            id=required_str(payload, "id"),
            amount=required_int(payload, "amount"),
            arrival_date=required_int(payload, "arrival_date"),
            created=required_int(payload, "created"),
            currency=decode_enum(Currency, payload["currency"]),
            status=decode_enum(PayoutStatus, payload["status"]),
            method=decode_enum(PayoutMethod, payload["method"]),
            payout_type=decode_enum(PayoutType, payload["type"]),
            livemode=optional_bool(payload, "livemode"),
            balance_transaction=optional_str(payload, "balance_transaction"),
            description=optional_str(payload, "description"),
            destination=optional_str(payload, "destination"),
            failure_balance_transaction=optional_str(payload, "failure_balance_transaction"),
            failure_code=decode_optional_enum(PayoutFailureCode, payload.get("failure_code")),
            failure_message=optional_str(payload, "failure_message"),
            source_type=decode_optional_enum(PayoutSourceType, payload.get("source_type")),
            statement_descriptor=optional_str(payload, "statement_descriptor"),
            metadata=Metadata.from_response(payload.get("metadata")),
            raw=dict(payload),
        )

    @classmethod
    def create(cls, transport: Transport, params: PayoutParams) -> "Payout":
        return operations.create(transport, PATH, params, cls.from_response)

    @classmethod
    def retrieve(cls, transport: Transport, payout_id: str) -> "Payout":
        return operations.retrieve(transport, PATH, payout_id, cls.from_response)

    @classmethod
    def update(
        cls,
        transport: Transport,
        payout_id: str,
        metadata: Optional[Metadata] = None,
    ) -> "Payout":
        params = PayoutUpdateParams(metadata=metadata)
        return operations.update(transport, PATH, payout_id, params, cls.from_response)

    @classmethod
    def list(
        cls,
        transport: Transport,
        params: Optional[PayoutListParams] = None,
    ) -> "PagedList[Payout]":
        return operations.list_(transport, PATH, params, cls.from_response)

    @classmethod
    def cancel(cls, transport: Transport, payout_id: str) -> "Payout":
        """Cancel a pending payout; the request has no body."""
        return operations.action(transport, PATH, payout_id, "cancel", None, cls.from_response)
