from types import SimpleNamespace

import pytest
from fastapi import HTTPException

from storefront.utils.security import require_user

CART = [
    {"_id": 1, "name": "Book", "price": 10, "quantity": 1},
    {"_id": 2, "name": "Laptop", "price": 950, "quantity": 1},
    {"_id": 3, "name": "Shirt", "price": 45, "quantity": 1},
]


@pytest.fixture
def saved_orders(monkeypatch):
    saved = []

    def _insert(record):
        saved.append(record)
        return record

    monkeypatch.setattr("storefront.payments.service.orders_repository.insert_order", _insert)
    return saved


def test_token_returns_client_token(client, fake_gateway):
    for method in (client.get, client.post):
        res = method("/api/v1/product/braintree/token")
        assert res.status_code == 200
        assert res.json() == {"success": True, "clientToken": "token123"}


def test_token_error_returns_500(client, fake_gateway):
    fake_gateway.client_token.generate.side_effect = Exception("Some error")
    res = client.post("/api/v1/product/braintree/token")
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "Some error", "message": "Error in generating token"}


def test_payment_success(client, fake_gateway, saved_orders):
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "nonce-ok", "cart": CART})

    assert res.status_code == 200
    assert res.json() == {"ok": True}
    params = fake_gateway.transaction.sale.call_args.args[0]
    assert params["amount"] == "1005.00"
    assert params["payment_method_nonce"] == "nonce-ok"
    assert params["options"] == {"submit_for_settlement": True}
    assert len(saved_orders) == 1
    assert saved_orders[0]["buyer"] == "test-user"
    assert saved_orders[0]["payment"]["transaction"]["id"] == "txn_123"


@pytest.mark.parametrize(
    "body, message",
    [
        ({"cart": CART}, "Payment nonce is required"),
        ({"nonce": "n"}, "Cart is required"),
        ({"nonce": "n", "cart": "oops"}, "Cart is required"),
        ({"nonce": "n", "cart": []}, "Cart is empty"),
    ],
)
def test_payment_validation_errors(client, fake_gateway, saved_orders, body, message):
    res = client.post("/api/v1/product/braintree/payment", json=body)
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": message}
    assert fake_gateway.transaction.sale.call_count == 0
    assert saved_orders == []


@pytest.mark.parametrize(
    "cart",
    [
        [{"_id": 1, "price": "abc"}, {"_id": 2, "price": 10}],
        [{"_id": 1, "price": 100, "quantity": 1}, {"_id": 2, "price": 60, "quantity": -1}],
    ],
)
def test_payment_rejects_unchargeable_cart(client, fake_gateway, saved_orders, cart):
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": cart})
    assert res.status_code == 400
    assert res.json()["message"] == "Invalid cart item"
    assert fake_gateway.transaction.sale.call_count == 0
    assert saved_orders == []


def test_payment_non_object_body_is_missing_nonce(client, saved_orders):
    res = client.post("/api/v1/product/braintree/payment", content=b"not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 400
    assert res.json()["message"] == "Payment nonce is required"


def test_payment_missing_identity(app, client, fake_gateway, saved_orders):
    app.dependency_overrides[require_user] = lambda: {"email": "ghost@example.com"}
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": CART})
    assert res.status_code == 400
    assert res.json() == {"success": False, "message": "User ID is required"}
    assert fake_gateway.transaction.sale.call_count == 0


def test_payment_unauthenticated(app, client):
    def _deny():
        raise HTTPException(status_code=401, detail="Not authenticated")
    app.dependency_overrides[require_user] = _deny
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": CART})
    assert res.status_code == 401


def test_payment_gateway_refusal_is_502(client, fake_gateway, saved_orders):
    fake_gateway.transaction.sale.return_value = SimpleNamespace(
        is_success=False,
        message="Processor Declined",
        errors=SimpleNamespace(deep_errors=[]),
    )
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": CART})

    assert res.status_code == 502
    assert res.json() == {"success": False, "error": "Processor Declined", "message": "Payment transaction failed"}
    assert saved_orders == []


def test_payment_gateway_exception_is_500(client, fake_gateway, saved_orders):
    fake_gateway.transaction.sale.side_effect = RuntimeError("timeout")
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": CART})

    assert res.status_code == 500
    assert res.json()["message"] == "Payment gateway unavailable"
    assert res.json()["error"] == "timeout"
    assert saved_orders == []


def test_payment_order_save_failure_is_500(client, monkeypatch):
    def _boom(record):
        raise RuntimeError("db down")
    monkeypatch.setattr("storefront.payments.service.orders_repository.insert_order", _boom)

    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": CART})
    assert res.status_code == 500
    assert res.json() == {"success": False, "error": "db down", "message": "Error in saving order"}


def test_security_headers_present(client):
    res = client.get("/health")
    assert res.json() == {"ok": True}
    assert res.headers["X-Content-Type-Options"] == "nosniff"
    assert res.headers["X-Frame-Options"] == "DENY"


def test_payment_service_runs_in_threadpool(client, fake_gateway, saved_orders, monkeypatch):
    from storefront.payments import views

    calls = []
    original = views.run_in_threadpool

    async def _spy(func, *args, **kwargs):
        calls.append(func)
        return await original(func, *args, **kwargs)

    monkeypatch.setattr(views, "run_in_threadpool", _spy)
    res = client.post("/api/v1/product/braintree/payment", json={"nonce": "n", "cart": CART})

    assert res.status_code == 200
    assert calls == [views.payments_service.submit_payment]
