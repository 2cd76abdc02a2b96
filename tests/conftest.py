"""tests/conftest.py – shared fixtures for all tests."""
import os

# must be set before canteen_api.config is imported
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("SEED_DEMO_DATA", "0")

from datetime import datetime, timezone
from unittest.mock import patch

import pytest
from fastapi.testclient import TestClient

from canteen_api.core.notifier import OrderNotifier
from canteen_api.core.payments import PaymentVerifier
from canteen_api.core.security import hash_password
from canteen_api.core.store import CanteenStore
from canteen_api.handlers.admin_handler import AdminHandler
from canteen_api.handlers.auth_handler import AuthHandler
from canteen_api.handlers.menu_handler import MenuHandler
from canteen_api.handlers.order_handler import OrderHandler
from canteen_api.handlers.report_handler import ReportHandler
from canteen_api.models import LineItem, Order


class FakeClock:
    """Callable clock whose time tests can move."""

    def __init__(self, now: datetime) -> None:
        self.now = now

    def __call__(self) -> datetime:
        return self.now


def make_order(**kw) -> Order:
    defaults = dict(
        id="o-1", student_id="stu-1", canteen_id="block1",
        items=[LineItem(menu_id="m1", name="Idli (2 pcs)", quantity=1, price=30)],
        pickup_slot="2026-10-19T12:30:00", payment_id="pay_test", total=30,
        status="queued", numeric_token="123456", qr_code="",
        created_at="2026-10-19T10:00:00+00:00", feedback="",
    )
    defaults.update(kw)
    return Order(**defaults)


def auth_headers(client: TestClient, identifier: str, password: str) -> dict:
    r = client.post("/auth/login", json={"identifier": identifier, "password": password})
    assert r.status_code == 200, r.text
    return {"Authorization": f"Bearer {r.json()['token']}"}


def place_order(client: TestClient, headers: dict, canteen_id="block1", items=None, pickup_slot="2026-10-19T12:30:00"):
    """Verify a UPI payment then place an order; returns the raw response."""
    pay = client.post("/orders/payment/verify", json={"payment_method": "UPI"}, headers=headers)
    assert pay.status_code == 200, pay.text
    return client.post("/orders", headers=headers, json={
        "canteen_id": canteen_id,
        "items": items if items is not None else [{"menu_id": "m1", "quantity": 1}],
        "pickup_slot": pickup_slot,
        "payment_id": pay.json()["payment_id"],
    })


# ── Store / services ───────────────────────────────────────────────────────────

@pytest.fixture
def store():
    """Fresh in-memory store with the demo canteens, accounts and menu."""
    s = CanteenStore("sqlite://")
    s.create_schema()
    s.seed(hash_password)
    yield s
    s.dispose()


@pytest.fixture
def notifier():
    return OrderNotifier()


@pytest.fixture
def clock():
    return FakeClock(datetime.now(timezone.utc))


@pytest.fixture
def services(store, notifier, clock):
    """Patch all singletons in deps so every test gets its own data."""
    with patch.multiple(
        "canteen_api.deps",
        _store=store,
        _notifier=notifier,
        _auth=AuthHandler(store),
        _orders=OrderHandler(store, PaymentVerifier(), notifier, clock=clock),
        _menus=MenuHandler(store),
        _reports=ReportHandler(store, clock=clock),
        _admin=AdminHandler(store),
    ):
        yield store


@pytest.fixture
def client(services):
    from canteen_api.main import app
    return TestClient(app)


@pytest.fixture
def student_headers(client):
    return auth_headers(client, "student@svce.edu", "student123")


@pytest.fixture
def staff_headers(client):
    return auth_headers(client, "staff@svce.edu", "staff123")


@pytest.fixture
def admin_headers(client):
    return auth_headers(client, "admin@svce.edu", "admin123")
