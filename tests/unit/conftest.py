from datetime import datetime

import pytest
import pytest_asyncio

from alarm_manager.db.engine import build_engine, build_session_factory
from alarm_manager.models import Base
from alarm_manager.services import (
    CustomerService, SettingsService, WorkOrderService, seed_defaults,
)

# Fixed "now" for work-order scheduling rules.
NOW = datetime(2024, 5, 15, 9, 30)


@pytest_asyncio.fixture
async def db():
    engine = build_engine("sqlite+aiosqlite:///:memory:")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    factory = build_session_factory(engine)
    async with factory() as session:
        yield session
    await engine.dispose()


@pytest_asyncio.fixture
async def seeded(db):
    await seed_defaults(db)
    return db


@pytest.fixture
def settings_service(seeded):
    return SettingsService(seeded)


@pytest.fixture
def customer_service(seeded):
    return CustomerService(seeded)


@pytest.fixture
def work_order_service(seeded):
    return WorkOrderService(seeded, clock=lambda: NOW)


async def lookup_named(settings: SettingsService, kind: str, name: str):
    for row in await settings.list_lookups(kind):
        if row.display_name == name:
            return row
    raise AssertionError(f"no {kind} named {name!r}")


async def make_customer(customers: CustomerService, settings: SettingsService, **overrides):
    residential = await lookup_named(settings, "customer_type", "Residential")
    data = {
        "first_name": "Dana",
        "last_name": "Whitfield",
        "street": "12 Harbor Rd",
        "city": "Mystic",
        "state": "ct",
        "zip_code": "06355",
        "email_address": "dana@example.com",
        "home_phone": "860-555-0142",
        "customer_type_id": residential.id,
    }
    data.update(overrides)
    return await customers.create_customer(data)


async def make_work_order(work_orders: WorkOrderService, settings: SettingsService, customer, **overrides):
    wo_type = await lookup_named(settings, "work_order_type", "Service Call")
    category = await lookup_named(settings, "work_order_category", "Security System")
    data = {
        "customer_id": customer.id,
        "description": "Keypad not responding",
        "work_order_type_id": wo_type.id,
        "category_id": category.id,
    }
    data.update(overrides)
    return await work_orders.create_work_order(data)
