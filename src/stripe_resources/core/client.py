"""
HTTP transport for the API and the helpers that interpret its responses.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional, Protocol

import requests

from .config import ClientConfig
from .errors import ApiError, DecodeError, TransportError

__all__ = [
    "Client",
    "RawResponse",
    "Transport",
    "decode_json",
]

_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


@dataclass(frozen=True)
class RawResponse:
    status_code: int
    body: bytes


class Transport(Protocol):
    """
    The request/response contract resource operations are written against.

    Implementations return the raw response for every HTTP status and raise
    :class:`TransportError` only when no response was received.
    """

    def get(self, path: str) -> RawResponse: ...

    def post(self, path: str, body: str) -> RawResponse: ...

    def post_empty(self, path: str) -> RawResponse: ...

    def delete(self, path: str) -> RawResponse: ...


def decode_json(response: RawResponse) -> Dict[str, Any]:
    """
    Parse a response body, raising :class:`ApiError` for error envelopes.
    """
    try:
        payload = json.loads(response.body)
    except (UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise DecodeError(
            f"Response with status {response.status_code} is not valid JSON: "
            f"{response.body[:200]!r}"
        ) from exc

    if not isinstance(payload, dict):
        raise DecodeError(
            f"Expected a JSON object, got {type(payload).__name__}"
        )

    envelope = payload.get("error")
    if isinstance(envelope, dict):
        raise ApiError.from_envelope(response.status_code, envelope)
    if response.status_code >= 400:
        raise ApiError.from_envelope(response.status_code, {})
    return payload


class Client:
    """
    :class:`Transport` implementation backed by :mod:`requests`.

    Authentication headers come from the :class:`ClientConfig`; retries and
    connection pooling are whatever the supplied session provides.
    """

    def __init__(
        self,
        config: ClientConfig,
        *,
        session: Optional[requests.Session] = None,
    ) -> None:
        self.config = config
        self.session = session or requests.Session()

    def _request(
        self,
        method: str,
        path: str,
        *,
        body: Optional[str] = None,
    ) -> RawResponse:
        url = self.config.url_for(path)
        headers = self.config.headers()
        if body is not None:
            headers["Content-Type"] = _FORM_CONTENT_TYPE

        logging.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method,
                url,
                data=body,
                headers=headers,
                timeout=self.config.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logging.debug("%s %s -> %s", method, url, response.status_code)
        return RawResponse(status_code=response.status_code, body=response.content)

    def get(self, path: str) -> RawResponse:
        return self._request("GET", path)

    def post(self, path: str, body: str) -> RawResponse:
        return self._request("POST", path, body=body)

    def post_empty(self, path: str) -> RawResponse:
        return self._request("POST", path)

    def delete(self, path: str) -> RawResponse:
        return self._request("DELETE", path)

    def close(self) -> None:
        self.session.close()

    def __enter__(self) -> "Client":
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.close()
