from functools import lru_cache

from app.core.config import settings
from app.services.orders.service import OrderService
from app.services.orders.store import OrderStore
from app.services.payments.factory import get_payments_provider


@lru_cache
def get_order_store() -> OrderStore:
    # one store per process so every request shares the same lock
    return OrderStore(settings.ORDERS_FILE)


# fastAPI dependency
def get_order_service() -> OrderService:
    return OrderService(
        store=get_order_store(),
        provider=get_payments_provider(),
        key_secret=settings.RAZORPAY_KEY_SECRET,
        webhook_secret=settings.RAZORPAY_WEBHOOK_SECRET,
    )
