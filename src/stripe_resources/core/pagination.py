"""
Cursor-based pagination over list endpoints.

A :class:`PagedList` is one page of a listing as the server returned it.
Fetching another page produces a new :class:`PagedList`; pages are never
mutated or merged. Nothing ties two pages to the same snapshot of the data,
so a listing can shift between requests if the server state changes.
"""

from __future__ import annotations

import dataclasses
import logging
from collections.abc import Mapping
from typing import (
    Any,
    Callable,
    Dict,
    Generic,
    Iterator,
    Optional,
    Sequence,
    Tuple,
    TypeVar,
    overload,
)
from urllib.parse import parse_qsl, urlsplit

from .client import Transport, decode_json
from .errors import DecodeError, InvalidCursor, RequestError
from .params import Identifiable, check_path, encode_query

__all__ = ["PagedList", "fetch_list"]

T = TypeVar("T", bound=Identifiable)

Decoder = Callable[[Dict[str, Any]], T]

_API_VERSION_PREFIX = "/v1"


def _collection_path(url: str) -> Tuple[str, Dict[str, str]]:
    parts = urlsplit(url)
    path = parts.path
    if path == _API_VERSION_PREFIX or path.startswith(_API_VERSION_PREFIX + "/"):
        path = path[len(_API_VERSION_PREFIX):]
    return path, dict(parse_qsl(parts.query))


def _with_cursor(params: Any, base: Mapping[str, str], **cursor: Optional[str]) -> Any:
    if params is None:
        merged: Dict[str, Any] = dict(base)
        merged.update(cursor)
        return merged
    if dataclasses.is_dataclass(params) and not isinstance(params, type):
        return dataclasses.replace(params, **cursor)
    if isinstance(params, Mapping):
        merged = dict(params)
        merged.update(cursor)
        return merged
    raise RequestError(
        f"List parameters must be a dataclass or a mapping, got {type(params).__name__}"
    )


class PagedList(Generic[T]):
    """
    One page of a ``{"object": "list", ...}`` response.

    Build instances with :meth:`from_response`; the cursor methods rely on the
    page reflecting what the server actually sent.

    ``has_more`` counts results in the direction the page was fetched: after
    it for ordinary and ``starting_after`` requests, before it for
    ``ending_before`` requests. It only stops paging in that direction.
    """

    __slots__ = ("_data", "_has_more", "_url", "_path", "_filters", "_decoder", "_backward")

    def __init__(
        self,
        data: Sequence[T],
        has_more: bool,
        url: str,
        path: str,
        filters: Mapping[str, str],
        decoder: Decoder,
        backward: bool = False,
    ) -> None:
        self._data: Tuple[T, ...] = tuple(data)
        self._has_more = has_more
        self._url = url
        self._path = path
        self._filters = dict(filters)
        self._decoder = decoder
        self._backward = backward

    @classmethod
    def from_response(
        cls,
        payload: Any,
        decoder: Decoder,
        *,
        path: Optional[str] = None,
        backward: bool = False,
    ) -> "PagedList[T]":
        """
        Decode a list object, turning each element of ``data`` with ``decoder``.

        ``path`` is the collection the list was requested from. Lists embedded
        in other resources have none and fall back to the path of ``url``. Any
        query string on ``url`` becomes the default filter for later pages.
        ``backward`` marks a page requested with ``ending_before``.
        """
        if not isinstance(payload, Mapping):
            raise DecodeError(f"Expected a list object, got {type(payload).__name__}")
        if payload.get("object") != "list":
            raise DecodeError(f"Expected object 'list', got {payload.get('object')!r}")

        data = payload.get("data")
        has_more = payload.get("has_more")
        url = payload.get("url")
        if not isinstance(data, list):
            raise DecodeError("List object is missing its 'data' array")
        if not isinstance(has_more, bool):
            raise DecodeError("List object is missing its 'has_more' flag")
        if not isinstance(url, str):
            raise DecodeError("List object is missing its 'url'")

        url_path, filters = _collection_path(url)
        try:
            items = [decoder(item) for item in data]
        except (KeyError, TypeError, ValueError) as exc:
            raise DecodeError(f"Could not decode list element from {url}: {exc!r}") from exc

        return cls(
            items,
            has_more,
            url,
            path if path is not None else url_path,
            filters,
            decoder,
            backward,
        )

    @property
    def data(self) -> Tuple[T, ...]:
        return self._data

    @property
    def has_more(self) -> bool:
        return self._has_more

    @property
    def url(self) -> str:
        return self._url

    @property
    def path(self) -> str:
        return self._path

    @property
    def backward(self) -> bool:
        return self._backward

    def __len__(self) -> int:
        return len(self._data)

    def __iter__(self) -> Iterator[T]:
        return iter(self._data)

    @overload
    def __getitem__(self, index: int) -> T: ...

    @overload
    def __getitem__(self, index: slice) -> Tuple[T, ...]: ...

    def __getitem__(self, index):
        return self._data[index]

    def __bool__(self) -> bool:
        return bool(self._data)

    def __repr__(self) -> str:
        return (
            f"PagedList(url={self._url!r}, count={len(self._data)}, "
            f"has_more={self._has_more}, backward={self._backward})"
        )

    def _exhausted(self) -> "PagedList[T]":
        return PagedList(
            (), False, self._url, self._path, self._filters, self._decoder, self._backward
        )

    def _cursor(self, index: int, direction: str) -> str:
        if not self._data:
            raise InvalidCursor(
                f"{self._url} returned an empty page; no {direction} cursor can be derived"
            )
        cursor = self._data[index].id
        if not isinstance(cursor, str) or not cursor:
            raise InvalidCursor(f"Element of {self._url} has no usable identifier")
        return cursor

    def _more_after(self) -> bool:
        return bool(self._data) if self._backward else self._has_more

    def next_page(self, transport: Transport, params: Any = None) -> "PagedList[T]":
        """
        Fetch the page following this one.

        ``params`` are the filters of the original list call; its
        ``starting_after`` is replaced by the id of the last element here.
        A forward page without more results yields an empty final page
        without a request.
        """
        if not self._backward and not self._has_more:
            return self._exhausted()
        cursor = self._cursor(-1, "starting_after")
        logging.debug("Fetching %s starting after %s", self._path, cursor)
        query = _with_cursor(params, self._filters, starting_after=cursor, ending_before=None)
        return fetch_list(transport, self._path, query, self._decoder)

    def previous_page(self, transport: Transport, params: Any = None) -> "PagedList[T]":
        """
        Fetch the page preceding this one, keyed on the first element's id.

        A backward page without more results yields an empty page without a
        request.
        """
        if self._backward and not self._has_more:
            return self._exhausted()
        cursor = self._cursor(0, "ending_before")
        logging.debug("Fetching %s ending before %s", self._path, cursor)
        query = _with_cursor(params, self._filters, ending_before=cursor, starting_after=None)
        return fetch_list(transport, self._path, query, self._decoder)

    def auto_paging_iter(self, transport: Transport, params: Any = None) -> Iterator[T]:
        """
        Yield every element of this page and of all pages after it.
        """
        page: PagedList[T] = self
        while True:
            yield from page
            if not page._more_after():
                return
            page = page.next_page(transport, params)


def fetch_list(
    transport: Transport,
    path: str,
    params: Any,
    decoder: Decoder,
) -> PagedList[T]:
    """GET ``path`` with ``params`` as query string and decode a list page."""
    check_path(path)
    query = encode_query(params)
    target = f"{path}?{query}" if query else path
    backward = "ending_before" in dict(parse_qsl(query))
    payload = decode_json(transport.get(target))
    return PagedList.from_response(payload, decoder, path=path, backward=backward)
