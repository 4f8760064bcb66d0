# tests/conftest.py
import os

# Must be set before the app (and its limiter) are imported
os.environ["RATE_LIMIT_ENABLED"] = "false"
os.environ["ADMIN_API_KEY"] = ""

import pytest
from fastapi.testclient import TestClient

from billing_admin.core.config import settings


@pytest.fixture
def client(tmp_path, monkeypatch):
    monkeypatch.setattr(settings, "DATABASE_URL", f"sqlite+aiosqlite:///{tmp_path / 'billing.db'}")
    from billing_admin.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def customer(client):
    resp = client.post("/api/customers", json={"full_name": "Asha Rao", "city": "Pune"})
    assert resp.status_code == 201
    return resp.json()


@pytest.fixture
def account(client, customer):
    resp = client.post(
        "/api/accounts",
        json={"customer_id": customer["id"], "opening_balance": 1000, "pending_amount": 250.5},
    )
    assert resp.status_code == 201
    return resp.json()
