import logging
from typing import Any, Dict, Optional

import httpx

from app.core.config import settings
from app.services.errors import GatewayError
from .base import PaymentsProvider, to_subunits

logger = logging.getLogger(__name__)


class RazorpayPayments(PaymentsProvider):
    """Razorpay Orders API over plain HTTP.

    Equivalent to:
    curl -u $RAZORPAY_KEY_ID:$RAZORPAY_KEY_SECRET -X POST https://api.razorpay.com/v1/orders \
    -H "content-type: application/json" \
    -d '{"amount": 50000, "currency": "INR", "receipt": "r1", "notes": {}}'
    """

    name = "razorpay"

    def __init__(
        self,
        key_id: Optional[str] = None,
        key_secret: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        client: Optional[httpx.Client] = None,
    ):
        self.key_id = key_id if key_id is not None else settings.RAZORPAY_KEY_ID
        self.key_secret = key_secret if key_secret is not None else settings.RAZORPAY_KEY_SECRET
        self.base_url = (base_url or settings.RAZORPAY_API_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.GATEWAY_TIMEOUT_SECONDS
        self._client = client

    def _post(self, path: str, payload: Dict[str, Any]) -> httpx.Response:
        url = f"{self.base_url}{path}"
        auth = (self.key_id, self.key_secret)
        if self._client is not None:
            return self._client.post(url, json=payload, auth=auth, timeout=self.timeout)
        return httpx.post(url, json=payload, auth=auth, timeout=self.timeout)

    def create_order(self, amount, currency: str, receipt: Optional[str] = None,
                     notes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        if not self.key_id or not self.key_secret:
            raise GatewayError("Razorpay credentials not configured")

        payload = {
            "amount": to_subunits(amount),
            "currency": currency,
            "receipt": receipt,
            "notes": notes or {},
        }
        try:
            resp = self._post("/orders", payload)
        except httpx.HTTPError as e:
            logger.error(f"Razorpay request failed: {e}")
            raise GatewayError("Gateway request failed", detail=str(e)) from e

        try:
            data = resp.json()
        except ValueError:
            data = {"raw": resp.text[:500]}

        if resp.status_code != 200:
            error = data.get("error") if isinstance(data, dict) else None
            description = (error or {}).get("description") if isinstance(error, dict) else None
            logger.error(f"Razorpay rejected order (HTTP {resp.status_code}): {description or data}")
            raise GatewayError(f"Create order failed: HTTP {resp.status_code}", detail=description)

        if not isinstance(data, dict) or not data.get("id"):
            raise GatewayError("Create order failed: malformed gateway response")

        logger.info(f"Razorpay order created: {data['id']}")
        return data
