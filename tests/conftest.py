import os

# Pas de Redis réel pour le rate limiting pendant les tests
os.environ.setdefault("DISABLE_FASTAPI_LIMITER_INIT_FOR_TESTS", "1")

import pytest
import fakeredis
from types import SimpleNamespace
from typing import Generator, Dict, Any
from fastapi.testclient import TestClient
from unittest.mock import MagicMock

from storefront.asgi import app as fastapi_app
from storefront.utils.security import require_user, require_admin

# Marquage automatique selon le dossier
def pytest_collection_modifyitems(config, items):
    for item in items:
        nodeid = item.nodeid.replace("\\", "/")
        if "tests/unit/" in nodeid:
            item.add_marker(pytest.mark.unit)
        elif "tests/integration/" in nodeid:
            item.add_marker(pytest.mark.integration)
        elif "tests/functional/" in nodeid:
            item.add_marker(pytest.mark.functional)

@pytest.fixture(scope="session")
def app():
    return fastapi_app

@pytest.fixture()
def client(app) -> Generator[TestClient, None, None]:
    with TestClient(app) as c:
        yield c

@pytest.fixture
def fake_user() -> Dict[str, Any]:
    return {
        "id": "test-user",
        "email": "test@example.com",
        "role": "user",
        "metadata": {"full_name": "Test User"},
    }

# Simuler un utilisateur authentifié pour les endpoints protégés
@pytest.fixture(autouse=True)
def _override_require_user(app, fake_user):
    app.dependency_overrides[require_user] = lambda: fake_user
    try:
        yield
    finally:
        app.dependency_overrides.pop(require_user, None)

@pytest.fixture
def admin_client(app, client):
    app.dependency_overrides[require_admin] = lambda: {"id": "admin-user-id", "role": "admin", "email": "admin@example.com"}
    yield client
    app.dependency_overrides.pop(require_admin, None)

# Supabase: jamais de réseau
@pytest.fixture(autouse=True)
def mock_supabase(monkeypatch):
    supabase = MagicMock()
    monkeypatch.setattr("storefront.infra.supabase_client.get_supabase", lambda: supabase)
    monkeypatch.setattr("storefront.infra.supabase_client.get_service_supabase", lambda: supabase)
    return supabase

# Redis panier: fakeredis en mémoire
@pytest.fixture(autouse=True)
def cart_redis(monkeypatch):
    r = fakeredis.FakeRedis(decode_responses=True)
    monkeypatch.setattr("storefront.cart.views.get_cart_redis", lambda: r)
    return r

def _make_transaction(**overrides):
    fields = {
        "id": "txn_123",
        "status": "submitted_for_settlement",
        "type": "sale",
        "amount": "1005.00",
        "currency_iso_code": "USD",
        "processor_response_code": "1000",
        "processor_response_text": "Approved",
        "created_at": None,
    }
    fields.update(overrides)
    return SimpleNamespace(**fields)

# Braintree: passerelle factice (succès par défaut)
@pytest.fixture(autouse=True)
def fake_gateway(monkeypatch):
    gateway = MagicMock()
    gateway.client_token.generate.return_value = "token123"
    gateway.transaction.sale.return_value = SimpleNamespace(is_success=True, transaction=_make_transaction())
    monkeypatch.setattr("storefront.payments.braintree_client.get_gateway", lambda: gateway)
    return gateway

@pytest.fixture
def make_transaction():
    return _make_transaction
