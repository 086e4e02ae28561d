import pytest
import pytest_asyncio
from datetime import date

from warehouse.core.db import init_db, close_db
from warehouse.models.appointment import Appointment, AppointmentStatus
from warehouse.schemas.actor import Actor
from warehouse.schemas.inventory import InventoryItemCreate
from warehouse.services.inventory_service import create_item


@pytest_asyncio.fixture
async def db():
    """Fresh in-memory SQLite database per test."""
    await init_db(db_url="sqlite://:memory:")
    yield
    await close_db()


@pytest.fixture
def actor():
    return Actor(id="7", name="Maria Santos", role="staff")


@pytest.fixture
def make_item(db, actor):
    async def _make(name: str, quantity: int = 0, **extra):
        return await create_item(InventoryItemCreate(name=name, quantity=quantity, **extra), actor)
    return _make


@pytest.fixture
def make_appointment(db):
    async def _make(items, status=AppointmentStatus.PENDING, **extra):
        fields = {
            "supplier_id": 3,
            "supplier_name": "Metro Office Supplies",
            "date": date(2026, 11, 2),
            "time": "09:30",
            "status": status,
            "items": [
                {"item_id": item.id, "item_name": item.name, "quantity": qty}
                for item, qty in items
            ],
            "scheduled_by": "Maria Santos",
        }
        fields.update(extra)
        return await Appointment.create(**fields)
    return _make
