import time
from typing import Any, Dict, Optional
from uuid import uuid4

from .base import PaymentsProvider, to_subunits


class MockPayments(PaymentsProvider):
    """offline gateway for local runs and tests, echoes the request like Razorpay does."""

    name = "mock"

    def create_order(self, amount, currency: str, receipt: Optional[str] = None,
                     notes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        subunits = to_subunits(amount)
        return {
            "id": f"order_{uuid4().hex[:14]}",
            "entity": "order",
            "amount": subunits,
            "amount_paid": 0,
            "amount_due": subunits,
            "currency": currency,
            "receipt": receipt,
            "status": "created",
            "attempts": 0,
            "notes": notes or {},
            "created_at": int(time.time()),
        }
