from __future__ import annotations

import pytest

from stripe_resources.core.errors import (
    DecodeError,
    InvalidCursor,
    RateLimitError,
    TransportError,
)
from stripe_resources.core.pagination import PagedList
from stripe_resources.core.params import RangeQuery
from stripe_resources.resources import (
    Charge,
    PaymentIntent,
    PaymentIntentListParams,
    Payout,
    PayoutListParams,
)

from .conftest import (
    FailingTransport,
    list_payload,
    payment_intent_payload,
    payout_payload,
)


def _intents(*ids):
    return [payment_intent_payload(id=intent_id) for intent_id in ids]


def _page(ids, has_more, url="/v1/payment_intents"):
    return list_payload(_intents(*ids), has_more, url)


class TestFromResponse:
    def test_decodes_elements_in_server_order(self):
        page = PagedList.from_response(
            _page(["pi_3", "pi_1", "pi_2"], True), PaymentIntent.from_response
        )

        assert [intent.id for intent in page] == ["pi_3", "pi_1", "pi_2"]
        assert page.has_more is True
        assert page.url == "/v1/payment_intents"
        assert page.path == "/payment_intents"
        assert len(page) == 3
        assert page[0].id == "pi_3"

    @pytest.mark.parametrize(
        "payload",
        [
            {"object": "payment_intent", "data": [], "has_more": False, "url": "/v1/x"},
            {"object": "list", "has_more": False, "url": "/v1/x"},
            {"object": "list", "data": [], "url": "/v1/x"},
            {"object": "list", "data": [], "has_more": "no", "url": "/v1/x"},
            {"object": "list", "data": [], "has_more": False},
            ["not", "an", "object"],
        ],
    )
    def test_rejects_malformed_lists(self, payload):
        with pytest.raises(DecodeError):
            PagedList.from_response(payload, PaymentIntent.from_response)

    def test_element_shape_errors_are_decode_errors(self):
        payload = list_payload([{"id": "pi_1"}], False, "/v1/payment_intents")
        with pytest.raises(DecodeError):
            PagedList.from_response(payload, PaymentIntent.from_response)


class TestNextPage:
    def test_visits_every_page_once_in_order(self, transport):
        pages = [
            (["pi_1", "pi_2"], True),
            (["pi_3", "pi_4"], True),
            (["pi_5", "pi_6"], True),
            (["pi_7"], False),
        ]
        for ids, has_more in pages[1:]:
            transport.queue(_page(ids, has_more))
        params = PaymentIntentListParams(limit=2)

        page = PagedList.from_response(
            _page(*pages[0]), PaymentIntent.from_response, path="/payment_intents"
        )
        visited = []
        while page.has_more:
            page = page.next_page(transport, params)
            visited.append([intent.id for intent in page])

        assert visited == [ids for ids, _ in pages[1:]]
        assert page.has_more is False
        assert len(transport.requests) == 3

    def test_cursor_is_the_last_element_id(self, transport):
        transport.queue(_page(["pi_9"], False))
        params = PaymentIntentListParams(
            limit=2, created=RangeQuery(gte=1546300800), starting_after="pi_0"
        )
        page = PagedList.from_response(
            _page(["pi_7", "pi_8"], True), PaymentIntent.from_response, path="/payment_intents"
        )

        page.next_page(transport, params)

        request = transport.last
        assert request.method == "GET"
        assert request.route == "/payment_intents"
        assert request.query == {
            "created[gte]": "1546300800",
            "limit": "2",
            "starting_after": "pi_8",
        }

    def test_does_not_mutate_the_receiver_or_params(self, transport):
        transport.queue(_page(["pi_3"], False))
        params = PaymentIntentListParams(limit=2)
        page = PagedList.from_response(
            _page(["pi_1", "pi_2"], True), PaymentIntent.from_response, path="/payment_intents"
        )

        following = page.next_page(transport, params)

        assert following is not page
        assert [intent.id for intent in page] == ["pi_1", "pi_2"]
        assert page.has_more is True
        assert params.starting_after is None

    def test_last_page_yields_empty_page_without_request(self, transport):
        page = PagedList.from_response(_page(["pi_1"], False), PaymentIntent.from_response)

        following = page.next_page(transport)

        assert len(following) == 0
        assert following.has_more is False
        assert transport.requests == []

    def test_empty_page_claiming_more_is_an_invalid_cursor(self, transport):
        page = PagedList.from_response(_page([], True), PaymentIntent.from_response)

        with pytest.raises(InvalidCursor):
            page.next_page(transport)
        with pytest.raises(InvalidCursor):
            page.previous_page(transport)
        assert transport.requests == []

    def test_mapping_params(self, transport):
        transport.queue(list_payload([payout_payload(id="po_3")], False, "/v1/payouts"))
        page = PagedList.from_response(
            list_payload([payout_payload(id="po_2")], True, "/v1/payouts"),
            Payout.from_response,
        )

        following = page.next_page(transport, {"status": "paid", "ending_before": "po_9"})

        assert transport.last.query == {"status": "paid", "starting_after": "po_2"}
        assert isinstance(following[0], Payout)


class TestPreviousPage:
    def test_cursor_is_the_first_element_id(self, transport):
        transport.queue(list_payload([payout_payload(id="po_1")], False, "/v1/payouts"))
        params = PayoutListParams(limit=1, starting_after="po_0")
        page = PagedList.from_response(
            list_payload(
                [payout_payload(id="po_2"), payout_payload(id="po_3")], True, "/v1/payouts"
            ),
            Payout.from_response,
            path="/payouts",
        )

        earlier = page.previous_page(transport, params)

        assert transport.last.query == {"ending_before": "po_2", "limit": "1"}
        assert [payout.id for payout in earlier] == ["po_1"]


class TestEmbeddedLists:
    def test_embedded_url_supplies_path_and_filters(self, transport):
        charge = {
            "id": "ch_1",
            "object": "charge",
            "amount": 1000,
            "currency": "usd",
            "status": "succeeded",
            "created": 1546300800,
            "payment_intent": "pi_123",
        }
        intent = PaymentIntent.from_response(
            payment_intent_payload(
                charges=list_payload([charge], True, "/v1/charges?payment_intent=pi_123")
            )
        )
        transport.queue(
            list_payload([dict(charge, id="ch_2")], False, "/v1/charges?payment_intent=pi_123")
        )

        assert intent.charges is not None
        assert intent.charges.path == "/charges"
        following = intent.charges.next_page(transport)

        assert transport.last.route == "/charges"
        assert transport.last.query == {"payment_intent": "pi_123", "starting_after": "ch_1"}
        assert isinstance(following[0], Charge)
        assert following[0].id == "ch_2"


def test_auto_paging_iter_follows_cursors(transport):
    transport.queue(_page(["pi_3", "pi_4"], True))
    transport.queue(_page(["pi_5"], False))
    params = PaymentIntentListParams(limit=2)
    page = PagedList.from_response(
        _page(["pi_1", "pi_2"], True), PaymentIntent.from_response, path="/payment_intents"
    )

    ids = [intent.id for intent in page.auto_paging_iter(transport, params)]

    assert ids == ["pi_1", "pi_2", "pi_3", "pi_4", "pi_5"]
    assert [request.query["starting_after"] for request in transport.requests] == ["pi_2", "pi_4"]


class TestDirection:
    def test_last_page_can_step_back(self, transport):
        transport.queue(_page(["pi_3"], False))
        transport.queue(_page(["pi_1", "pi_2"], False))
        params = PaymentIntentListParams(limit=2)
        first = PagedList.from_response(
            _page(["pi_1", "pi_2"], True), PaymentIntent.from_response, path="/payment_intents"
        )

        last = first.next_page(transport, params)
        back = last.previous_page(transport, params)

        assert last.has_more is False
        assert [intent.id for intent in back] == ["pi_1", "pi_2"]
        assert back.backward is True
        assert transport.last.query == {"ending_before": "pi_3", "limit": "2"}

    def test_backward_page_has_more_only_limits_going_back(self, transport):
        transport.queue(_page(["pi_3"], False))
        params = PaymentIntentListParams(limit=2)
        page = PagedList.from_response(
            _page(["pi_1", "pi_2"], False),
            PaymentIntent.from_response,
            path="/payment_intents",
            backward=True,
        )

        earlier = page.previous_page(transport, params)
        later = page.next_page(transport, params)

        assert len(earlier) == 0
        assert [intent.id for intent in later] == ["pi_3"]
        assert later.backward is False
        assert [request.query for request in transport.requests] == [
            {"limit": "2", "starting_after": "pi_2"}
        ]

    def test_initial_ending_before_listing_is_backward(self, transport):
        transport.queue(_page(["pi_1"], False))

        page = PaymentIntent.list(transport, PaymentIntentListParams(ending_before="pi_2"))

        assert page.backward is True

    def test_auto_paging_from_backward_page(self, transport):
        transport.queue(_page(["pi_3", "pi_4"], True))
        transport.queue(_page(["pi_5"], False))
        page = PagedList.from_response(
            _page(["pi_1", "pi_2"], False),
            PaymentIntent.from_response,
            path="/payment_intents",
            backward=True,
        )

        ids = [intent.id for intent in page.auto_paging_iter(transport)]

        assert ids == ["pi_1", "pi_2", "pi_3", "pi_4", "pi_5"]
        assert len(transport.requests) == 2


class TestFailures:
    def _first(self):
        return PagedList.from_response(
            _page(["pi_1", "pi_2"], True), PaymentIntent.from_response, path="/payment_intents"
        )

    def test_transport_error_reaches_next_page_caller(self):
        with pytest.raises(TransportError):
            self._first().next_page(FailingTransport(TransportError("down")))

    def test_transport_error_reaches_auto_paging_caller(self):
        seen = []

        with pytest.raises(TransportError):
            for intent in self._first().auto_paging_iter(FailingTransport(TransportError("down"))):
                seen.append(intent.id)

        assert seen == ["pi_1", "pi_2"]

    def test_non_list_body_is_a_decode_error(self, transport):
        transport.queue(payment_intent_payload())

        with pytest.raises(DecodeError):
            self._first().next_page(transport)

    def test_api_error_reaches_next_page_caller(self, transport):
        transport.queue(
            {"error": {"type": "rate_limit_error", "message": "Too many requests"}},
            status_code=429,
        )

        with pytest.raises(RateLimitError):
            self._first().next_page(transport)
