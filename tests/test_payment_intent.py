from __future__ import annotations

import pytest

from stripe_resources.core.errors import (
    ApiError,
    CardError,
    DecodeError,
    ErrorType,
    InvalidRequestError,
    RequestError,
    TransportError,
)
from stripe_resources.core.params import Metadata, RangeQuery
from stripe_resources.resources import (
    Address,
    CancellationReason,
    CaptureMethod,
    Currency,
    PaymentIntent,
    PaymentIntentCaptureParams,
    PaymentIntentConfirmParams,
    PaymentIntentCreateParams,
    PaymentIntentListParams,
    PaymentIntentStatus,
    PaymentIntentUpdateParams,
    ShippingDetails,
)

from .conftest import FailingTransport, list_payload, payment_intent_payload


def test_create_then_cancel(transport):
    transport.queue(payment_intent_payload(id="pi_123", status="requires_confirmation"))
    transport.queue(payment_intent_payload(id="pi_123", status="canceled"))

    intent = PaymentIntent.create(
        transport, PaymentIntentCreateParams(amount=1000, currency=Currency.USD)
    )

    assert intent.id == "pi_123"
    assert intent.status is PaymentIntentStatus.REQUIRES_CONFIRMATION
    create_request = transport.last
    assert (create_request.method, create_request.path) == ("POST", "/payment_intents")
    assert create_request.form == {"amount": "1000", "currency": "usd"}

    canceled = PaymentIntent.cancel(transport, "pi_123", None)

    cancel_request = transport.last
    assert (cancel_request.method, cancel_request.path) == ("POST", "/payment_intents/pi_123/cancel")
    assert cancel_request.body is None
    assert canceled.status is PaymentIntentStatus.CANCELED


def test_cancel_with_reason_sends_it(transport):
    transport.queue(
        payment_intent_payload(status="canceled", cancellation_reason="requested_by_customer")
    )

    canceled = PaymentIntent.cancel(
        transport, "pi_123", CancellationReason.REQUESTED_BY_CUSTOMER
    )

    assert transport.last.form == {"cancellation_reason": "requested_by_customer"}
    assert canceled.cancellation_reason is CancellationReason.REQUESTED_BY_CUSTOMER


def test_confirm_card_declined(transport):
    transport.queue(
        {
            "error": {
                "type": "card_error",
                "code": "card_declined",
                "message": "Your card was declined.",
                "param": "",
            }
        },
        status_code=402,
    )

    with pytest.raises(ApiError) as excinfo:
        PaymentIntent.confirm(
            transport, "pi_123", PaymentIntentConfirmParams(source="tok_chargeDeclined")
        )

    error = excinfo.value
    assert isinstance(error, CardError)
    assert error.error_type is ErrorType.CARD
    assert error.code == "card_declined"
    assert error.status_code == 402
    assert transport.last.path == "/payment_intents/pi_123/confirm"
    assert transport.last.form == {"source": "tok_chargeDeclined"}


def test_confirm_without_params_posts_no_body(transport):
    transport.queue(payment_intent_payload(status="requires_capture"))

    PaymentIntent.confirm(transport, "pi_123")

    assert transport.last.body is None


def test_capture(transport):
    transport.queue(payment_intent_payload(status="succeeded", amount_received=750))

    intent = PaymentIntent.capture(
        transport, "pi_123", PaymentIntentCaptureParams(amount_to_capture=750)
    )

    assert transport.last.path == "/payment_intents/pi_123/capture"
    assert transport.last.form == {"amount_to_capture": "750"}
    assert intent.amount_received == 750


def test_retrieve(transport):
    transport.queue(payment_intent_payload(id="pi_abc"))

    intent = PaymentIntent.retrieve(transport, "pi_abc")

    assert (transport.last.method, transport.last.path) == ("GET", "/payment_intents/pi_abc")
    assert intent.id == "pi_abc"
    assert intent.currency is Currency.USD
    assert intent.capture_method is CaptureMethod.AUTOMATIC
    assert intent.allowed_source_types == ("card",)


def test_retrieve_missing_intent(transport):
    transport.queue(
        {
            "error": {
                "type": "invalid_request_error",
                "code": "resource_missing",
                "param": "intent",
                "message": "No such payment_intent: pi_nope",
            }
        },
        status_code=404,
    )

    with pytest.raises(InvalidRequestError) as excinfo:
        PaymentIntent.retrieve(transport, "pi_nope")
    assert excinfo.value.param == "intent"


def test_retrieve_requires_an_identifier(transport):
    with pytest.raises(RequestError):
        PaymentIntent.retrieve(transport, "")
    assert transport.requests == []


def test_update_sends_only_set_fields(transport):
    transport.queue(payment_intent_payload(description="Order 42", metadata={"order": "42"}))
    params = PaymentIntentUpdateParams(
        description="Order 42",
        metadata=Metadata(order="42"),
        shipping=ShippingDetails(name="Jenny Rosen", address=Address(city="Paris", country="FR")),
    )

    intent = PaymentIntent.update(transport, "pi_123", params)

    assert transport.last.path == "/payment_intents/pi_123"
    assert transport.last.form == {
        "description": "Order 42",
        "metadata[order]": "42",
        "shipping[name]": "Jenny Rosen",
        "shipping[address][city]": "Paris",
        "shipping[address][country]": "FR",
    }
    assert intent.metadata == Metadata(order="42")


def test_list_encodes_filters(transport):
    transport.queue(
        list_payload([payment_intent_payload()], False, "/v1/payment_intents")
    )
    params = PaymentIntentListParams(
        created=RangeQuery(gte=1546300800, lt=1548979200), limit=5
    )

    page = PaymentIntent.list(transport, params)

    assert transport.last.route == "/payment_intents"
    assert transport.last.query_pairs == [
        ("created[gte]", "1546300800"),
        ("created[lt]", "1548979200"),
        ("limit", "5"),
    ]
    assert [intent.id for intent in page] == ["pi_123"]
    assert page.has_more is False


def test_list_without_params(transport):
    transport.queue(list_payload([], False, "/v1/payment_intents"))

    page = PaymentIntent.list(transport)

    assert transport.last.path == "/payment_intents"
    assert len(page) == 0


def test_nested_records_decode():
    intent = PaymentIntent.from_response(
        payment_intent_payload(
            status="requires_source_action",
            last_payment_error={
                "type": "card_error",
                "code": "authentication_required",
                "source": {"id": "src_1", "object": "source"},
            },
            next_source_action={
                "type": "authorize_with_url",
                "authorize_with_url": {"url": "https://hooks.example/3ds", "return_url": None},
            },
            shipping={
                "name": "Jenny Rosen",
                "address": {"line1": "1 Main St", "city": "Paris", "country": "FR"},
            },
            transfer_data={"destination": "acct_1"},
        )
    )

    assert intent.last_payment_error is not None
    assert intent.last_payment_error.error_type is ErrorType.CARD
    assert intent.last_payment_error.source == "src_1"
    assert intent.next_source_action is not None
    assert intent.next_source_action.authorize_with_url.url == "https://hooks.example/3ds"
    assert intent.shipping is not None and intent.shipping.address.city == "Paris"
    assert intent.transfer_data is not None and intent.transfer_data.destination == "acct_1"
    assert intent.raw["id"] == "pi_123"


def test_wrongly_typed_field_is_a_decode_error(transport):
    transport.queue(payment_intent_payload(amount="1000"))

    with pytest.raises(DecodeError):
        PaymentIntent.retrieve(transport, "pi_123")


def test_minimal_payload_decodes():
    intent = PaymentIntent.from_response({"id": "pi_123", "status": "requires_confirmation"})

    assert intent.id == "pi_123"
    assert intent.metadata == Metadata()
    assert intent.charges is None


def test_confirm_transport_failure_reaches_caller():
    with pytest.raises(TransportError):
        PaymentIntent.confirm(FailingTransport(TransportError("connection reset")), "pi_123")


def test_confirm_non_object_body_is_a_decode_error(transport):
    transport.queue(["pi_123"])

    with pytest.raises(DecodeError):
        PaymentIntent.confirm(transport, "pi_123")
