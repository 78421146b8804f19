"""
Generic request templates shared by every resource type.

A concrete resource only supplies its collection path, its params types and
a decoder turning a JSON object into its record type; the HTTP verb, URL
layout and response handling live here.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Dict, TypeVar

from .client import RawResponse, Transport, decode_json
from .errors import DecodeError
from .pagination import PagedList, fetch_list
from .params import encode_body, resource_path

__all__ = [
    "action",
    "create",
    "decode_resource",
    "delete",
    "list_",
    "retrieve",
    "update",
]

R = TypeVar("R")

Decoder = Callable[[Dict[str, Any]], R]


def decode_resource(response: RawResponse, decoder: Decoder[R]) -> R:
    """
    Decode a single-resource response, raising for error envelopes.
    """
    payload = decode_json(response)
    try:
        return decoder(payload)
    except (KeyError, TypeError, ValueError) as exc:
        kind = payload.get("object", "resource")
        raise DecodeError(f"Could not decode {kind}: {exc!r}") from exc


def _post(transport: Transport, path: str, params: Any) -> RawResponse:
    body = encode_body(params)
    if body is None:
        return transport.post_empty(path)
    return transport.post(path, body)


def create(
    transport: Transport,
    path: str,
    params: Any,
    decoder: Decoder[R],
) -> R:
    """POST ``params`` to the collection."""
    target = resource_path(path)
    logging.info("Creating resource at %s", target)
    return decode_resource(_post(transport, target, params), decoder)


def retrieve(
    transport: Transport,
    path: str,
    resource_id: str,
    decoder: Decoder[R],
) -> R:
    """GET one resource by identifier."""
    target = resource_path(path, resource_id)
    logging.info("Retrieving %s", target)
    return decode_resource(transport.get(target), decoder)


def update(
    transport: Transport,
    path: str,
    resource_id: str,
    params: Any,
    decoder: Decoder[R],
) -> R:
    """
    POST a partial update; fields left unset are not sent, so they keep their
    current server-side value.
    """
    target = resource_path(path, resource_id)
    logging.info("Updating %s", target)
    return decode_resource(_post(transport, target, params), decoder)


def list_(
    transport: Transport,
    path: str,
    params: Any,
    decoder: Decoder[R],
) -> PagedList:
    """GET a page of the collection filtered by ``params``."""
    target = resource_path(path)
    logging.info("Listing %s", target)
    return fetch_list(transport, target, params, decoder)


def action(
    transport: Transport,
    path: str,
    resource_id: str,
    name: str,
    params: Any,
    decoder: Decoder[R],
) -> R:
    """
    POST to ``path/id/name``; params encoding to nothing send no body at all.
    """
    target = resource_path(path, resource_id, name)
    logging.info("Submitting %s", target)
    return decode_resource(_post(transport, target, params), decoder)


def delete(
    transport: Transport,
    path: str,
    resource_id: str,
    decoder: Decoder[R],
) -> R:
    target = resource_path(path, resource_id)
    logging.info("Deleting %s", target)
    return decode_resource(transport.delete(target), decoder)

