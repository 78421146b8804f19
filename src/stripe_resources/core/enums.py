"""
String enumerations that tolerate values the client does not know yet.

The server may add variants to any enumerated field at any time. Decoding
such a value must not fail, so every enumeration used in a resource record
derives from :class:`ApiEnum`, which turns an unknown string into an
"unrecognized" pseudo-member that still carries the raw value::

    >>> status = PayoutStatus("held_for_review")
    >>> status.is_unrecognized
    True
    >>> status.value
    'held_for_review'
"""

from __future__ import annotations

from enum import Enum
from typing import Optional, Type, TypeVar

__all__ = ["ApiEnum", "decode_enum", "decode_optional_enum"]

E = TypeVar("E", bound="ApiEnum")

UNRECOGNIZED = "UNRECOGNIZED"


class ApiEnum(str, Enum):
    """Closed set of known wire values plus an open "unrecognized" arm."""

    @classmethod
    def _missing_(cls, value: object) -> Optional["ApiEnum"]:
        if not isinstance(value, str):
            return None
        member = str.__new__(cls, value)
        member._name_ = UNRECOGNIZED
        member._value_ = value
        return member

    @property
    def is_unrecognized(self) -> bool:
        return self._name_ == UNRECOGNIZED

    def __str__(self) -> str:
        return self.value

    def __repr__(self) -> str:
        return f"<{type(self).__name__}.{self._name_}: {self._value_!r}>"


def decode_enum(enum_cls: Type[E], raw: object) -> E:
    """Decode a required enumerated field; non-strings are a shape error."""
    if not isinstance(raw, str):
        raise TypeError(f"{enum_cls.__name__} expects a string, got {type(raw).__name__}")
    return enum_cls(raw)


def decode_optional_enum(enum_cls: Type[E], raw: object) -> Optional[E]:
    if raw is None:
        return None
    return decode_enum(enum_cls, raw)
