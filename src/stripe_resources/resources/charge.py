"""
Charge records, as embedded in a payment intent's ``charges`` list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core.enums import ApiEnum, decode_enum
from ..core.params import Metadata, Timestamp
from ..core.records import (
    optional_bool,
    optional_int,
    optional_str,
    raw_field,
    required_int,
    required_str,
)
from .currency import Currency

__all__ = ["Charge", "ChargeStatus"]


class ChargeStatus(ApiEnum):
    SUCCEEDED = "succeeded"
    PENDING = "pending"
    FAILED = "failed"


@dataclass(frozen=True)
class Charge:
    id: str
    amount: int
    currency: Currency
    status: ChargeStatus
    created: Timestamp
    amount_refunded: int = 0
    captured: bool = False
    paid: bool = False
    refunded: bool = False
    livemode: bool = False
    customer: Optional[str] = None
    description: Optional[str] = None
    failure_code: Optional[str] = None
    failure_message: Optional[str] = None
    payment_intent: Optional[str] = None
    metadata: Metadata = field(default_factory=Metadata)
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Charge":
        return cls(
            id=required_str(payload, "id"),
            amount=required_int(payload, "amount"),
            currency=decode_enum(Currency, payload["currency"]),
            status=decode_enum(ChargeStatus, payload["status"]),
            created=required_int(payload, "created"),
            amount_refunded=optional_int(payload, "amount_refunded") or 0,
            captured=optional_bool(payload, "captured"),
            paid=optional_bool(payload, "paid"),
            refunded=optional_bool(payload, "refunded"),
            livemode=optional_bool(payload, "livemode"),
            customer=optional_str(payload, "customer"),
            description=optional_str(payload, "description"),
            failure_code=optional_str(payload, "failure_code"),
            failure_message=optional_str(payload, "failure_message"),
            payment_intent=optional_str(payload, "payment_intent"),
            metadata=Metadata.from_response(payload.get("metadata")),
            raw=dict(payload),
        )
