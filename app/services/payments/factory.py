from app.core.config import settings
from .base import PaymentsProvider
from .mock import MockPayments
from .razorpay import RazorpayPayments


def get_payments_provider() -> PaymentsProvider:
    provider = (settings.PAYMENTS_PROVIDER or "razorpay").lower()
    if provider == "mock":
        return MockPayments()
    return RazorpayPayments()
