from datetime import datetime
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient

from orderflow.api.routers import analytics as analytics_router
from orderflow.api.routers import orders as orders_router
from orderflow.main import create_app
from orderflow.services.analytics_service import AnalyticsService


@pytest.fixture
def client(db, service, clock):
    app = create_app()
    app.dependency_overrides[orders_router.get_service] = lambda: service
    app.dependency_overrides[analytics_router.get_service] = lambda: AnalyticsService(db, clock=clock)
    # no context manager: the lifespan would create tables on the configured database
    return TestClient(app)


def test_health(client):
    assert client.get("/health").json() == {"status": "ok"}


def test_checkout_and_read_back(client, add_product, add_cart):
    add_product("p1", "10.00", stock=5, title="Rye")
    add_product("p2", "5.005", stock=5, title="Bagel")
    add_cart("u1", [("p1", 2), ("p2", 1)])

    resp = client.post("/orders/", json={"user_id": "u1", "address": "1 Main St"})
    assert resp.status_code == 201
    assert resp.json() == {"id": "ord_1", "status": "pending"}

    resp = client.get("/orders/ord_1", params={"user_id": "u1"})
    assert resp.status_code == 200
    body = resp.json()
    assert Decimal(str(body["total"])) == Decimal("25.01")
    assert body["customer_address"] == "1 Main St"

    resp = client.get("/orders/ord_1/items")
    assert [i["name"] for i in resp.json()] == ["Rye", "Bagel"]

    resp = client.get("/orders/history", params={"user_id": "u1"})
    history = resp.json()
    assert len(history) == 1
    assert history[0]["item_count"] == 3


def test_order_of_other_user_is_404(client, add_order):
    add_order("ord_x", user_id="u1")

    resp = client.get("/orders/ord_x", params={"user_id": "u2"})

    assert resp.status_code == 404


def test_empty_cart_is_400(client):
    resp = client.post("/orders/", json={"user_id": "u1", "address": "addr"})

    assert resp.status_code == 400
    assert resp.json()["detail"]["error"] == "empty_cart"


def test_insufficient_stock_is_409(client, add_product, add_cart):
    add_product("p1", "1.00", stock=0)
    add_cart("u1", [("p1", 1)])

    resp = client.post("/orders/", json={"user_id": "u1", "address": "addr"})

    assert resp.status_code == 409
    detail = resp.json()["detail"]
    assert detail["error"] == "insufficient_stock"
    assert detail["product_id"] == "p1"


def test_checkout_validates_payload(client):
    resp = client.post("/orders/", json={"user_id": "u1", "address": ""})

    assert resp.status_code == 422


def test_status_update(client, add_order):
    add_order("ord_1", total="12.00")

    resp = client.patch("/orders/ord_1/status", json={"status": "completed"})
    assert resp.status_code == 200
    assert resp.json() == {"id": "ord_1", "status": "completed"}

    assert client.patch("/orders/missing/status", json={"status": "completed"}).status_code == 404

    revenue = client.get("/analytics/revenue").json()["revenue"]
    assert Decimal(str(revenue)) == Decimal("12.00")


def test_analytics_endpoints(client, add_order):
    add_order("o1", created_at=datetime(2025, 2, 1))
    add_order("o2", created_at=datetime(2025, 2, 3))

    assert client.get("/analytics/orders/total").json() == {"total": 2}
    assert client.get("/analytics/sales/monthly", params={"year": 2025}).json() == [{"month": 2, "total": 2}]
