"""Pytest fixtures for storefront tests."""

import asyncio
import os
import tempfile
from datetime import datetime, timedelta

# Settings are read at import time, so the environment must be ready before the app is imported
_DB_DIR = tempfile.mkdtemp(prefix="storefront-tests-")
os.environ["DATABASE_URL"] = f"sqlite+aiosqlite:///{_DB_DIR}/storefront.db"
os.environ["JWT_SECRET_KEY"] = "test-secret-key"
os.environ["OTEL_TRACING_ENABLED"] = "false"
os.environ["CHECKOUT_RATE_LIMIT"] = "1000/minute"
os.environ["ADMIN_EMAIL"] = "admin@dinoxe.com"
os.environ["ADMIN_PASSWORD"] = "admin123"

import pytest
from fastapi.testclient import TestClient

from main import app
from shared.clock import get_clock
from shared.config.database import Base, engine
from shared.security import limiter

PHONE = "9876543210"


class FakeClock:
    """Stands in for the wall clock so cooldown windows can be stepped through."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, seconds: float):
        self.now += timedelta(seconds=seconds)


async def _reset_schema():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)


def make_order(phone: str = PHONE, **overrides) -> dict:
    """Checkout payload: one item at 500 and two at 300, totalling 1100."""
    payload = {
        "customer_name": "Ravi Kumar",
        "customer_phone": phone,
        "customer_email": "ravi@example.com",
        "delivery_address": "12 MG Road, Indiranagar, Bengaluru 560038",
        "alternate_phone": "",
        "delivery_instructions": "Call before delivery",
        "items": [
            {"product_id": 1, "product_name": "USB-C Charger 65W", "product_price": 500, "quantity": 1},
            {"product_id": 2, "product_name": "Braided Cable", "product_price": 300, "quantity": 2},
        ],
        "total_amount": 1100,
    }
    payload.update(overrides)
    return payload


@pytest.fixture
def clock():
    return FakeClock(datetime(2026, 10, 17, 9, 30, 0))


@pytest.fixture
def client(clock):
    asyncio.run(_reset_schema())
    limiter.reset()
    app.dependency_overrides[get_clock] = lambda: clock
    with TestClient(app) as test_client:
        yield test_client
    app.dependency_overrides.clear()


@pytest.fixture
def admin_headers(client):
    response = client.post("/admin/login", json={"email": "admin@dinoxe.com", "password": "admin123"})
    assert response.status_code == 200
    return {"Authorization": f"Bearer {response.json()['access_token']}"}


@pytest.fixture
def placed_order(client):
    response = client.post("/orders", json=make_order())
    assert response.status_code == 201
    return response.json()
