"""
Shared parameter types and the form/query encoding used by every resource.

Nested parameters are flattened with bracket notation, the format the API's
form decoder expects::

    >>> encode_query({"created": RangeQuery(gte=1000, lt=2000), "limit": 3})
    'created%5Bgte%5D=1000&created%5Blt%5D=2000&limit=3'
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterator, Mapping, MutableMapping
from datetime import datetime
from enum import Enum
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterable,
    List,
    Optional,
    Protocol,
    Tuple,
    TypeVar,
    Union,
    runtime_checkable,
)
from urllib.parse import quote, urlencode

from .errors import EncodingError, RequestError

__all__ = [
    "Identifiable",
    "Metadata",
    "RangeQuery",
    "Timestamp",
    "check_path",
    "encode_body",
    "encode_params",
    "encode_query",
    "resource_path",
]

Timestamp = int
"""Seconds since the Unix epoch."""

T = TypeVar("T")

_RANGE_BOUNDS = ("gt", "gte", "lt", "lte")


@runtime_checkable
class Identifiable(Protocol):
    """Anything exposing the API-assigned identifier as ``id``."""

    @property
    def id(self) -> str: ...


class Metadata(MutableMapping):
    """
    Ordered string-to-string annotations attached to a resource.

    Keys compare by exact string equality. The client never mutates metadata
    it received; it is only sent back when the caller puts it in a request.
    """

    __slots__ = ("_items",)

    def __init__(
        self,
        items: Union[Mapping[str, str], Iterable[Tuple[str, str]], None] = None,
        **kwargs: str,
    ) -> None:
        self._items: Dict[str, str] = {}
        if items is not None:
            self.update(items)
        if kwargs:
            self.update(kwargs)

    def __getitem__(self, key: str) -> str:
        return self._items[key]

    def __setitem__(self, key: str, value: str) -> None:
        if not isinstance(key, str):
            raise TypeError(f"Metadata keys must be strings, got {type(key).__name__}")
        if not isinstance(value, str):
            raise TypeError(
                f"Metadata value for '{key}' must be a string, got {type(value).__name__}"
            )
        self._items[key] = value

    def __delitem__(self, key: str) -> None:
        del self._items[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._items)

    def __len__(self) -> int:
        return len(self._items)

    def __repr__(self) -> str:
        return f"Metadata({self._items!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def to_dict(self) -> Dict[str, str]:
        return dict(self._items)

    @classmethod
    def from_response(cls, payload: Any) -> "Metadata":
        """
        Decode the ``metadata`` object of a response; ``None`` is an empty map.
        """
        if payload is None:
            return cls()
        if not isinstance(payload, Mapping):
            raise TypeError(f"metadata must be an object, got {type(payload).__name__}")
        metadata = cls()
        for key, value in payload.items():
            metadata[key] = value
        return metadata


@dataclasses.dataclass(frozen=True)
class RangeQuery(Generic[T]):
    """
    Up to four independent bounds on a comparable scalar.

    Bounds are not checked against each other; ``RangeQuery(gt=10, lt=5)`` is
    sent as-is and left for the server to judge.
    """

    gt: Optional[T] = None
    gte: Optional[T] = None
    lt: Optional[T] = None
    lte: Optional[T] = None

    def to_params(self) -> Dict[str, T]:
        params: Dict[str, T] = {}
        for bound in _RANGE_BOUNDS:
            value = getattr(self, bound)
            if value is not None:
                params[bound] = value
        return params

    def is_empty(self) -> bool:
        return not self.to_params()

    @classmethod
    def from_params(
        cls,
        params: Mapping[str, Any],
        field: Optional[str] = None,
        cast: Callable[[Any], T] = int,  # type: ignore[assignment]
    ) -> "RangeQuery[T]":
        """
        Rebuild a range from its encoded form.

        With ``field`` the flat bracketed keys (``created[gt]``) are read, as
        produced by parsing an encoded query string; without it ``params`` is
        the nested ``{"gt": ...}`` mapping.
        """
        bounds: Dict[str, T] = {}
        for bound in _RANGE_BOUNDS:
            key = f"{field}[{bound}]" if field is not None else bound
            if key in params:
                bounds[bound] = cast(params[key])
        return cls(**bounds)


def _encode_scalar(key: str, value: Any) -> str:
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, Enum):
        return str(value.value)
    if isinstance(value, datetime):
        if value.tzinfo is None or value.utcoffset() is None:
            raise EncodingError(f"Parameter '{key}' is a naive datetime; attach a timezone")
        return str(int(value.timestamp()))
    if isinstance(value, (int, str)):
        return str(value)
    if isinstance(value, float):
        if value != value or value in (float("inf"), float("-inf")):
            raise EncodingError(f"Parameter '{key}' is not a finite number")
        return repr(value)
    raise EncodingError(
        f"Parameter '{key}' has unsupported type {type(value).__name__}"
    )


def _check_key(key: Any, prefix: Optional[str]) -> str:
    if not isinstance(key, str) or not key:
        raise EncodingError(f"Parameter names must be non-empty strings, got {key!r}")
    if "[" in key or "]" in key:
        where = f" under '{prefix}'" if prefix else ""
        raise EncodingError(f"Parameter name '{key}'{where} must not contain brackets")
    return key


def _wire_fields(obj: Any) -> List[Tuple[str, Any]]:
    # fields flagged encode=False (such as a record's raw payload) stay local
    return [
        (field.name, getattr(obj, field.name))
        for field in dataclasses.fields(obj)
        if field.metadata.get("encode", True)
    ]


def _flatten(prefix: str, value: Any, pairs: List[Tuple[str, str]]) -> None:
    if value is None:
        return
    if isinstance(value, RangeQuery):
        for bound, bound_value in value.to_params().items():
            if isinstance(bound_value, bool):
                raise EncodingError(f"Range bound '{prefix}[{bound}]' must not be a boolean")
            _flatten(f"{prefix}[{bound}]", bound_value, pairs)
        return
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        for name, item in _wire_fields(value):
            _flatten(f"{prefix}[{name}]", item, pairs)
        return
    if isinstance(value, Mapping):
        for key, item in value.items():
            _flatten(f"{prefix}[{_check_key(key, prefix)}]", item, pairs)
        return
    if isinstance(value, (list, tuple)):
        for index, item in enumerate(value):
            _flatten(f"{prefix}[{index}]", item, pairs)
        return
    pairs.append((prefix, _encode_scalar(prefix, value)))


def _top_level_items(params: Any) -> Iterable[Tuple[str, Any]]:
    if params is None:
        return ()
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        return _wire_fields(params)
    if isinstance(params, Mapping):
        return params.items()
    raise EncodingError(
        f"Parameters must be a dataclass or a mapping, got {type(params).__name__}"
    )


def encode_params(params: Any) -> List[Tuple[str, str]]:
    """
    Flatten a params dataclass or mapping into ordered ``(key, value)`` pairs.

    ``None`` fields are omitted, as are optional :class:`Metadata` maps that
    are empty, so the server keeps whatever it already has.
    """
    pairs: List[Tuple[str, str]] = []
    for key, value in _top_level_items(params):
        key = _check_key(key, None)
        if isinstance(value, Metadata) and not value:
            continue
        _flatten(key, value, pairs)
    return pairs


def encode_query(params: Any) -> str:
    """Encode ``params`` as a URL query string (without the leading ``?``)."""
    return urlencode(encode_params(params))


def encode_body(params: Any) -> Optional[str]:
    """
    Encode ``params`` as a form body; ``None`` when there is nothing to send.
    """
    pairs = encode_params(params)
    if not pairs:
        return None
    return urlencode(pairs)


def check_path(path: str) -> str:
    """Reject collection paths that are not plain absolute paths."""
    if not isinstance(path, str) or not path.startswith("/"):
        raise RequestError(f"Resource paths must start with '/', got {path!r}")
    if "?" in path or "#" in path:
        raise RequestError(f"Resource paths must not carry a query or fragment: {path!r}")
    return path


def resource_path(collection: str, resource_id: Optional[str] = None, action: Optional[str] = None) -> str:
    """
    Compose ``collection[/id[/action]]``.

    The identifier is percent-quoted but otherwise passed through untouched;
    the server decides whether it names an existing resource.
    """
    path = check_path(collection).rstrip("/")
    if resource_id is None:
        if action is not None:
            raise RequestError("An action path needs a resource identifier")
        return path
    if not isinstance(resource_id, str) or not resource_id:
        raise RequestError(f"Resource identifier must be a non-empty string, got {resource_id!r}")
    path = f"{path}/{quote(resource_id, safe='')}"
    if action is not None:
        path = f"{path}/{quote(action, safe='')}"
    return path
