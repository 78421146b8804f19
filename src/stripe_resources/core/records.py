"""
Field accessors used by the ``from_response`` decoders of resource records.

Missing required keys raise :class:`KeyError` and wrongly typed values raise
:class:`TypeError`; the operation templates report both as
:class:`~stripe_resources.core.errors.DecodeError`.
"""

from __future__ import annotations

from dataclasses import field
from typing import Any, Mapping, Optional, Tuple

__all__ = [
    "optional_bool",
    "optional_int",
    "optional_object",
    "optional_str",
    "raw_field",
    "required_bool",
    "required_int",
    "required_object",
    "required_str",
    "str_tuple",
]


def raw_field() -> Any:
    """The undecoded JSON object kept on every record; never sent back."""
    return field(
        default_factory=dict,
        repr=False,
        compare=False,
        metadata={"encode": False},
    )


def _typed(key: str, value: Any, expected: type, label: str) -> Any:
    # bool is an int subclass and must not pass as an amount or timestamp
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise TypeError(f"'{key}' must be {label}, got {type(value).__name__}")
    return value


def required_str(payload: Mapping[str, Any], key: str) -> str:
    return _typed(key, payload[key], str, "a string")


def optional_str(payload: Mapping[str, Any], key: str) -> Optional[str]:
    value = payload.get(key)
    if value is None:
        return None
    return _typed(key, value, str, "a string")


def required_int(payload: Mapping[str, Any], key: str) -> int:
    return _typed(key, payload[key], int, "an integer")


def optional_int(payload: Mapping[str, Any], key: str) -> Optional[int]:
    value = payload.get(key)
    if value is None:
        return None
    return _typed(key, value, int, "an integer")


def required_bool(payload: Mapping[str, Any], key: str) -> bool:
    return _typed(key, payload[key], bool, "a boolean")


def optional_bool(payload: Mapping[str, Any], key: str, default: bool = False) -> bool:
    value = payload.get(key)
    if value is None:
        return default
    return _typed(key, value, bool, "a boolean")


def str_tuple(payload: Mapping[str, Any], key: str) -> Tuple[str, ...]:
    value = payload.get(key)
    if value is None:
        return ()
    _typed(key, value, list, "an array")
    return tuple(_typed(key, item, str, "an array of strings") for item in value)



def required_object(payload: Mapping[str, Any], key: str) -> Mapping[str, Any]:
    return _typed(key, payload[key], dict, "an object")


def optional_object(payload: Mapping[str, Any], key: str) -> Optional[Mapping[str, Any]]:
    value = payload.get(key)
    if value is None:
        return None
    return _typed(key, value, dict, "an object")
