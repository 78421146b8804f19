"""
Customer records and the requests that manage them.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional

from ..core import operations
from ..core.client import Transport
from ..core.enums import decode_optional_enum
from ..core.pagination import PagedList
from ..core.params import Metadata, RangeQuery, Timestamp
from ..core.records import (
    optional_bool,
    optional_int,
    optional_str,
    raw_field,
    required_bool,
    required_int,
    required_str,
)
from .currency import Currency
from .shipping import ShippingDetails

__all__ = [
    "Customer",
    "CustomerListParams",
    "CustomerParams",
    "Deleted",
]

PATH = "/customers"


@dataclass(frozen=True)
class Deleted:
    """Acknowledgement returned when a resource is deleted."""

    id: str
    deleted: bool
    object: Optional[str] = None
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Deleted":
        return cls(
            id=required_str(payload, "id"),
            deleted=required_bool(payload, "deleted"),
            object=optional_str(payload, "object"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class CustomerParams:
    """Fields accepted when creating or updating a customer; all optional."""

    balance: Optional[int] = None
    coupon: Optional[str] = None
    description: Optional[str] = None
    email: Optional[str] = None
    metadata: Optional[Metadata] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    shipping: Optional[ShippingDetails] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class CustomerListParams:
    created: Optional[RangeQuery[Timestamp]] = None
    email: Optional[str] = None
    ending_before: Optional[str] = None
    limit: Optional[int] = None
    starting_after: Optional[str] = None


@dataclass(frozen=True)
class Customer:
    id: str
    created: Timestamp
    livemode: bool
    balance: int = 0
    currency: Optional[Currency] = None
    delinquent: bool = False
    description: Optional[str] = None
    email: Optional[str] = None
    name: Optional[str] = None
    phone: Optional[str] = None
    shipping: Optional[ShippingDetails] = None
    metadata: Metadata = field(default_factory=Metadata)
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Customer":
        return cls(
            id=required_str(payload, "id"),
            created=required_int(payload, "created"),
            livemode=required_bool(payload, "livemode"),
            balance=optional_int(payload, "balance") or 0,
            currency=decode_optional_enum(Currency, payload.get("currency")),
            delinquent=optional_bool(payload, "delinquent"),
            description=optional_str(payload, "description"),
            email=optional_str(payload, "email"),
            name=optional_str(payload, "name"),
            phone=optional_str(payload, "phone"),
            shipping=ShippingDetails.from_field(payload, "shipping"),
            metadata=Metadata.from_response(payload.get("metadata")),
            raw=dict(payload),
        )

    @classmethod
    def create(cls, transport: Transport, params: CustomerParams) -> "Customer":
        return operations.create(transport, PATH, params, cls.from_response)

    @classmethod
    def retrieve(cls, transport: Transport, customer_id: str) -> "Customer":
        return operations.retrieve(transport, PATH, customer_id, cls.from_response)

    @classmethod
    def update(
        cls,
        transport: Transport,
        customer_id: str,
        params: CustomerParams,
    ) -> "Customer":
        return operations.update(transport, PATH, customer_id, params, cls.from_response)

    @classmethod
    def delete(cls, transport: Transport, customer_id: str) -> Deleted:
        return operations.delete(transport, PATH, customer_id, Deleted.from_response)

    @classmethod
    def list(
        cls,
        transport: Transport,
        params: Optional[CustomerListParams] = None,
    ) -> "PagedList[Customer]":
        return operations.list_(transport, PATH, params, cls.from_response)
