from __future__ import annotations

import json
from collections import deque
from dataclasses import dataclass
from typing import Any, Deque, Dict, List, Optional, Tuple
from urllib.parse import parse_qsl, urlsplit

import pytest

from stripe_resources.core.client import RawResponse


@dataclass
class RecordedRequest:
    method: str
    path: str
    body: Optional[str]

    @property
    def route(self) -> str:
        return urlsplit(self.path).path

    @property
    def query(self) -> Dict[str, str]:
        return dict(parse_qsl(urlsplit(self.path).query))

    @property
    def query_pairs(self) -> List[Tuple[str, str]]:
        return parse_qsl(urlsplit(self.path).query)

    @property
    def form(self) -> Dict[str, str]:
        return dict(parse_qsl(self.body or ""))


class FakeTransport:
    """Transport double replaying queued responses and recording requests."""

    def __init__(self) -> None:
        self.requests: List[RecordedRequest] = []
        self._responses: Deque[RawResponse] = deque()

    def queue(self, payload: Any, status_code: int = 200) -> "FakeTransport":
        body = payload if isinstance(payload, bytes) else json.dumps(payload).encode("utf-8")
        self._responses.append(RawResponse(status_code=status_code, body=body))
        return self

    def _reply(self, method: str, path: str, body: Optional[str]) -> RawResponse:
        self.requests.append(RecordedRequest(method, path, body))
        if not self._responses:
            raise AssertionError(f"Unexpected request {method} {path}")
        return self._responses.popleft()

    def get(self, path: str) -> RawResponse:
        return self._reply("GET", path, None)

    def post(self, path: str, body: str) -> RawResponse:
        return self._reply("POST", path, body)

    def post_empty(self, path: str) -> RawResponse:
        return self._reply("POST", path, None)

    def delete(self, path: str) -> RawResponse:
        return self._reply("DELETE", path, None)

    @property
    def last(self) -> RecordedRequest:
        return self.requests[-1]


class FailingTransport:
    """Transport double whose every request raises ``error``."""

    def __init__(self, error: Exception) -> None:
        self.error = error

    def get(self, path: str) -> RawResponse:
        raise self.error

    def post(self, path: str, body: str) -> RawResponse:
        raise self.error

    def post_empty(self, path: str) -> RawResponse:
        raise self.error

    def delete(self, path: str) -> RawResponse:
        raise self.error


def payment_intent_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": "pi_123",
        "object": "payment_intent",
        "amount": 1000,
        "amount_capturable": 0,
        "amount_received": 0,
        "allowed_source_types": ["card"],
        "capture_method": "automatic",
        "confirmation_method": "publishable",
        "created": 1546300800,
        "currency": "usd",
        "livemode": False,
        "metadata": {},
        "status": "requires_confirmation",
        "charges": {
            "object": "list",
            "data": [],
            "has_more": False,
            "url": "/v1/charges?payment_intent=pi_123",
        },
    }
    payload.update(overrides)
    return payload


def payout_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": "po_1",
        "object": "payout",
        "amount": 5000,
        "arrival_date": 1546387200,
        "balance_transaction": "txn_1",
        "created": 1546300800,
        "currency": "usd",
        "description": "STRIPE PAYOUT",
        "destination": "ba_1",
        "livemode": False,
        "metadata": {},
        "method": "standard",
        "source_type": "card",
        "statement_descriptor": None,
        "status": "pending",
        "type": "bank_account",
    }
    payload.update(overrides)
    return payload


def customer_payload(**overrides: Any) -> Dict[str, Any]:
    payload: Dict[str, Any] = {
        "id": "cus_1",
        "object": "customer",
        "balance": 0,
        "created": 1546300800,
        "currency": None,
        "delinquent": False,
        "description": None,
        "email": "jenny@example.com",
        "livemode": False,
        "metadata": {},
        "shipping": None,
    }
    payload.update(overrides)
    return payload


def list_payload(items: List[Dict[str, Any]], has_more: bool, url: str) -> Dict[str, Any]:
    return {"object": "list", "data": items, "has_more": has_more, "url": url}


@pytest.fixture
def transport() -> FakeTransport:
    return FakeTransport()
