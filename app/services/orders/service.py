import json
import logging
from enum import Enum
from typing import Any, Dict, Optional

from app.models import OrderRecord, OrderStatus
from app.services.errors import SignatureError, WebhookPayloadError
from app.services.orders.store import OrderStore
from app.services.payments.base import PaymentsProvider

logger = logging.getLogger(__name__)

# webhook events that mean the money is in
PAID_EVENTS = ("payment.captured", "order.paid")


class VerificationResult(str, Enum):
    OK = "ok"
    FAILED = "verification_failed"
    ORDER_NOT_FOUND = "order_not_found"


class WebhookResult(str, Enum):
    APPLIED = "ok"
    IGNORED = "ignored"


def checkout_payload(order_id: str, payment_id: str) -> str:
    """string the gateway signs when checkout completes."""
    return f"{order_id}|{payment_id}"


class OrderService:
    def __init__(self, store: OrderStore, provider: PaymentsProvider, key_secret: str, webhook_secret: Optional[str] = None):
        self.store = store
        self.provider = provider
        self._key_secret = key_secret
        self._webhook_secret = webhook_secret or key_secret

    def create_order(self, amount, currency: str, receipt: Optional[str] = None,
                     notes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        # GatewayError propagates untouched, nothing is stored in that case
        order = self.provider.create_order(amount=amount, currency=currency, receipt=receipt, notes=notes)

        self.store.append(OrderRecord(
            order_id=order["id"],
            amount=order["amount"],
            currency=order["currency"],
            receipt=order.get("receipt"),
            status=OrderStatus.CREATED,
        ))
        return order

    def verify_payment(self, order_id: str, payment_id: str, signature: Optional[str]) -> VerificationResult:
        payload = checkout_payload(order_id, payment_id)
        if not self.provider.verify_signature(payload, signature, self._key_secret):
            logger.info(f"Payment verification failed for order {order_id}")
            return VerificationResult.FAILED

        updated = self.store.update(order_id, lambda record: record.mark_paid(payment_id))
        if updated is None:
            logger.warning(f"Verified payment {payment_id} for unknown order {order_id}")
            return VerificationResult.ORDER_NOT_FOUND

        logger.info(f"Payment verification successful for order {order_id}")
        return VerificationResult.OK

    def apply_webhook(self, body: bytes, signature: Optional[str]) -> WebhookResult:
        if not self.provider.verify_signature(body, signature, self._webhook_secret):
            raise SignatureError("Invalid webhook signature")

        try:
            event = json.loads(body)
        except ValueError as e:
            raise WebhookPayloadError("Webhook body is not valid JSON", detail=str(e)) from e
        if not isinstance(event, dict):
            raise WebhookPayloadError("Webhook body must be a JSON object")

        event_type = event.get("event")
        if event_type not in PAID_EVENTS:
            logger.info(f"Ignoring webhook event {event_type}")
            return WebhookResult.IGNORED

        order_id, payment_id = _extract_ids(event)
        if not isinstance(order_id, str) or not isinstance(payment_id, str) or not order_id or not payment_id:
            raise WebhookPayloadError(f"Event {event_type} carries no order/payment id")

        def _apply(record: OrderRecord) -> OrderRecord:
            return record.mark_paid(payment_id).model_copy(update={"webhook_received": True})

        updated = self.store.update(order_id, _apply)
        if updated is None:
            logger.warning(f"Webhook {event_type} for unknown order {order_id}")
            return WebhookResult.IGNORED

        logger.info(f"Order {order_id} marked paid via webhook {event_type}")
        return WebhookResult.APPLIED


def _entity(container: Dict[str, Any], key: str) -> Dict[str, Any]:
    wrapper = container.get(key) or {}
    if not isinstance(wrapper, dict):
        raise WebhookPayloadError(f"Webhook payload.{key} must be a JSON object")
    entity = wrapper.get("entity") or {}
    if not isinstance(entity, dict):
        raise WebhookPayloadError(f"Webhook payload.{key}.entity must be a JSON object")
    return entity


def _extract_ids(event: Dict[str, Any]) -> tuple[Optional[str], Optional[str]]:
    payload = event.get("payload") or {}
    if not isinstance(payload, dict):
        raise WebhookPayloadError("Webhook payload must be a JSON object")
    payment = _entity(payload, "payment")
    order = _entity(payload, "order")
    order_id = payment.get("order_id") or order.get("id")
    return order_id, payment.get("id")
