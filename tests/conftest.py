import hmac
import hashlib

import pytest
from fastapi.testclient import TestClient

from app.db.orders import get_order_service, get_order_store
from app.main import app
from app.services.orders.service import OrderService
from app.services.orders.store import OrderStore
from app.services.payments.mock import MockPayments

SECRET = "test_secret"


def sign(payload, secret: str = SECRET) -> str:
    if isinstance(payload, str):
        payload = payload.encode()
    return hmac.new(secret.encode(), payload, hashlib.sha256).hexdigest()


@pytest.fixture
def store(tmp_path):
    return OrderStore(tmp_path / "orders.json")


@pytest.fixture
def service(store):
    return OrderService(store=store, provider=MockPayments(), key_secret=SECRET)


@pytest.fixture
def client(store, service):
    app.dependency_overrides[get_order_store] = lambda: store
    app.dependency_overrides[get_order_service] = lambda: service
    try:
        yield TestClient(app)
    finally:
        app.dependency_overrides.clear()
