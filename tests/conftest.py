import pytest
from datetime import datetime
from decimal import Decimal
from types import SimpleNamespace

from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlalchemy.orm import sessionmaker

import delivery_app.models  # registers all models
from delivery_app.core.context import get_clock
from delivery_app.crud import driver as driver_crud
from delivery_app.crud import order as order_crud
from delivery_app.crud import restaurant as restaurant_crud
from delivery_app.db import get_db
from delivery_app.main import app
from delivery_app.models.base import Base
from delivery_app.models.delivery import OrderStatus

# Frozen "now" for every request in the API tests
NOW = datetime(2026, 10, 19, 12, 0, 0)


def make_order_stub(**overrides):
    """Plain attribute object shaped like an Order, for the pure services"""
    fields = dict(
        id="order-1",
        status=OrderStatus.CONFIRMED,
        driver_id=None,
        total_amount=Decimal("60.00"),
        created_at=NOW,
        accepted_at=None,
        delivered_at=None,
        driver_earnings=None,
    )
    fields.update(overrides)
    return SimpleNamespace(**fields)


@pytest.fixture
async def session_factory(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'test.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def client(session_factory):
    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: (lambda: NOW)

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()


@pytest.fixture
def make_driver(session_factory):
    async def _make(**fields):
        fields.setdefault("name", "Ahmed")
        fields.setdefault("phone", "+967770000001")
        fields.setdefault("is_available", True)
        async with session_factory() as session:
            return await driver_crud.create_driver(session, **fields)
    return _make


@pytest.fixture
def make_order(session_factory):
    async def _make(**fields):
        fields.setdefault("customer_name", "Customer")
        fields.setdefault("customer_phone", "+967771111111")
        fields.setdefault("delivery_address", "Sanaa, Hadda Street")
        fields.setdefault("items", [{"name": "Mandi", "quantity": 1}])
        fields.setdefault("total_amount", Decimal("60.00"))
        fields.setdefault("status", OrderStatus.CONFIRMED)
        fields.setdefault("created_at", NOW)
        async with session_factory() as session:
            return await order_crud.create_order(session, **fields)
    return _make


@pytest.fixture
def make_restaurant(session_factory):
    async def _make(name="Al-Zubairi Grill", phone="+967771000000", address="Sanaa"):
        async with session_factory() as session:
            return await restaurant_crud.create_restaurant(session, name, phone=phone, address=address)
    return _make


@pytest.fixture
def fetch_order(session_factory):
    async def _fetch(order_id):
        async with session_factory() as session:
            return await order_crud.get_order(session, order_id)
    return _fetch


@pytest.fixture
def fetch_driver(session_factory):
    async def _fetch(driver_id):
        async with session_factory() as session:
            return await driver_crud.get_driver(session, driver_id)
    return _fetch
