from decimal import Decimal, ROUND_HALF_UP, InvalidOperation
from typing import Any, Dict, Optional
import hmac
import hashlib

from app.services.errors import GatewayError


def to_subunits(amount) -> int:
    """convert a major-unit amount (rupees) to the gateway's subunit (paise)."""
    try:
        value = Decimal(str(amount)) * 100
        return int(value.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError, OverflowError):
        # garbage, NaN and Infinity all end up here
        raise GatewayError(f"Invalid amount value: {amount!r}")


def compute_signature(payload: str | bytes, secret: str) -> str:
    if isinstance(payload, str):
        payload = payload.encode("utf-8")
    return hmac.new((secret or "").encode("utf-8"), payload, hashlib.sha256).hexdigest()


class PaymentsProvider:
    """base payments provider interface."""

    name = "base"

    def create_order(
        self,
        amount,
        currency: str,
        receipt: Optional[str] = None,
        notes: Optional[Dict[str, Any]] = None,
    ) -> Dict[str, Any]:  # pragma: no cover
        raise NotImplementedError

    @staticmethod
    def verify_signature(payload: str | bytes, signature: Optional[str], secret: str) -> bool:
        if not signature or not secret:
            return False
        computed = compute_signature(payload, secret)
        try:
            return hmac.compare_digest(computed, signature)
        except TypeError:
            # non-ascii signature strings can't be compared in constant time
            return False
