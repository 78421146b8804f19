"""
Postal address and shipping records embedded in other resources.

They double as request parameters: the encoder skips the ``raw`` field, so a
decoded record can be sent back unchanged.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Mapping, Optional

from ..core.records import optional_object, optional_str, raw_field, required_object, required_str

__all__ = ["Address", "ShippingDetails"]


@dataclass(frozen=True)
class Address:
    line1: Optional[str] = None
    line2: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    postal_code: Optional[str] = None
    country: Optional[str] = None
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "Address":
        return cls(
            line1=optional_str(payload, "line1"),
            line2=optional_str(payload, "line2"),
            city=optional_str(payload, "city"),
            state=optional_str(payload, "state"),
            postal_code=optional_str(payload, "postal_code"),
            country=optional_str(payload, "country"),
            raw=dict(payload),
        )


@dataclass(frozen=True)
class ShippingDetails:
    name: str
    address: Address
    carrier: Optional[str] = None
    phone: Optional[str] = None
    tracking_number: Optional[str] = None
    raw: Dict[str, Any] = raw_field()

    @classmethod
    def from_response(cls, payload: Mapping[str, Any]) -> "ShippingDetails":
        return cls(
            name=required_str(payload, "name"),
            address=Address.from_response(required_object(payload, "address")),
            carrier=optional_str(payload, "carrier"),
            phone=optional_str(payload, "phone"),
            tracking_number=optional_str(payload, "tracking_number"),
            raw=dict(payload),
        )

    @classmethod
    def from_field(cls, payload: Mapping[str, Any], key: str) -> Optional["ShippingDetails"]:
        value = optional_object(payload, key)
        if value is None:
            return None
        return cls.from_response(value)
