import json
from unittest.mock import MagicMock

import pytest

from app.models import OrderStatus
from app.services.errors import GatewayError, SignatureError, StorageError, WebhookPayloadError
from app.services.orders.service import OrderService, VerificationResult, WebhookResult, checkout_payload
from app.services.payments.base import PaymentsProvider

from .conftest import SECRET, sign


def _webhook_body(order_id: str, event: str = "payment.captured", payment_id: str = "pay_test_payment_id") -> bytes:
    return json.dumps({
        "entity": "event",
        "event": event,
        "contains": ["payment"],
        "payload": {"payment": {"entity": {
            "id": payment_id, "entity": "payment", "amount": 50000, "currency": "INR",
            "status": "captured", "order_id": order_id,
        }}},
        "created_at": 1567674797,
    }).encode()


def test_create_then_verify_scenario(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="r1", notes={})

    records = store.load()
    assert len(records) == 1
    assert records[0].order_id == order["id"]
    assert records[0].amount == 50000
    assert records[0].status == OrderStatus.CREATED
    assert records[0].payment_id is None

    signature = sign(f"{order['id']}|pay_test_1")
    assert service.verify_payment(order["id"], "pay_test_1", signature) == VerificationResult.OK

    record = store.get(order["id"])
    assert record.status == OrderStatus.PAID
    assert record.payment_id == "pay_test_1"


def test_create_returns_gateway_order_verbatim(service):
    order = service.create_order(amount=1, currency="USD", receipt="r2", notes={"x": "y"})
    assert order["notes"] == {"x": "y"}
    assert order["entity"] == "order"


def test_gateway_failure_writes_nothing(store):
    provider = MagicMock(spec=PaymentsProvider)
    provider.create_order.side_effect = GatewayError("rejected")
    service = OrderService(store=store, provider=provider, key_secret=SECRET)

    with pytest.raises(GatewayError):
        service.create_order(amount=500, currency="INR", receipt="r1")
    assert not store.path.exists()


def test_checkout_payload_format():
    assert checkout_payload("order_1", "pay_2") == "order_1|pay_2"


def test_tampered_signature_never_touches_store(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="r1")
    good = sign(f"{order['id']}|pay_1")
    tampered = ("0" if good[0] != "0" else "1") + good[1:]

    store.load = MagicMock(side_effect=AssertionError("store accessed"))
    assert service.verify_payment(order["id"], "pay_1", tampered) == VerificationResult.FAILED


def test_unknown_order_is_reported_and_not_created(service, store):
    service.create_order(amount=500, currency="INR", receipt="r1")
    result = service.verify_payment("order_missing", "pay_1", sign("order_missing|pay_1"))
    assert result == VerificationResult.ORDER_NOT_FOUND
    assert len(store.load()) == 1
    assert store.get("order_missing") is None


def test_verify_twice_stays_paid(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="r1")
    signature = sign(f"{order['id']}|pay_1")
    assert service.verify_payment(order["id"], "pay_1", signature) == VerificationResult.OK
    assert service.verify_payment(order["id"], "pay_1", signature) == VerificationResult.OK
    record = store.get(order["id"])
    assert record.status == OrderStatus.PAID
    assert record.payment_id == "pay_1"


def test_storage_error_on_matched_path_propagates(service, store):
    store.path.write_text("garbage")
    with pytest.raises(StorageError):
        service.verify_payment("order_1", "pay_1", sign("order_1|pay_1"))


def test_webhook_marks_order_paid(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="test_receipt")
    body = _webhook_body(order["id"])

    assert service.apply_webhook(body, sign(body)) == WebhookResult.APPLIED

    record = store.get(order["id"])
    assert record.status == OrderStatus.PAID
    assert record.payment_id == "pay_test_payment_id"
    assert record.webhook_received is True


def test_webhook_after_checkout_keeps_first_payment_id(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="r1")
    service.verify_payment(order["id"], "pay_1", sign(f"{order['id']}|pay_1"))
    body = _webhook_body(order["id"], payment_id="pay_1")

    service.apply_webhook(body, sign(body))

    record = store.get(order["id"])
    assert record.payment_id == "pay_1"
    assert record.webhook_received is True


def test_webhook_order_paid_event_uses_order_entity(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="r1")
    body = json.dumps({
        "event": "order.paid",
        "payload": {
            "payment": {"entity": {"id": "pay_9"}},
            "order": {"entity": {"id": order["id"], "status": "paid"}},
        },
    }).encode()
    assert service.apply_webhook(body, sign(body)) == WebhookResult.APPLIED
    assert store.get(order["id"]).payment_id == "pay_9"


def test_webhook_bad_signature(service, store):
    body = _webhook_body("order_1")
    with pytest.raises(SignatureError):
        service.apply_webhook(body, sign(body, "wrong"))


def test_webhook_other_events_ignored(service, store):
    order = service.create_order(amount=500, currency="INR", receipt="r1")
    body = _webhook_body(order["id"], event="payment.failed")
    assert service.apply_webhook(body, sign(body)) == WebhookResult.IGNORED
    assert store.get(order["id"]).status == OrderStatus.CREATED


def test_webhook_unknown_order_ignored(service, store):
    body = _webhook_body("order_missing")
    assert service.apply_webhook(body, sign(body)) == WebhookResult.IGNORED
    assert store.load() == []


def test_webhook_invalid_json(service):
    body = b"not json"
    with pytest.raises(WebhookPayloadError):
        service.apply_webhook(body, sign(body))


def test_webhook_separate_secret(store):
    service = OrderService(store=store, provider=PaymentsProvider(), key_secret=SECRET, webhook_secret="whsec")
    body = _webhook_body("order_1")
    with pytest.raises(SignatureError):
        service.apply_webhook(body, sign(body))
    assert service.apply_webhook(body, sign(body, "whsec")) == WebhookResult.IGNORED


@pytest.mark.parametrize("payload", [
    "not an object",
    {"payment": "pay_1"},
    {"payment": {"entity": ["pay_1"]}},
    {"payment": {"entity": {"id": "pay_1", "order_id": "order_1"}}, "order": 7},
    {"payment": {"entity": {"id": 12, "order_id": "order_1"}}},
])
def test_webhook_malformed_payload_is_rejected(service, store, payload):
    body = json.dumps({"event": "payment.captured", "payload": payload}).encode()
    with pytest.raises(WebhookPayloadError):
        service.apply_webhook(body, sign(body))
    assert store.load() == []
