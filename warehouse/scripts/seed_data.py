# scripts/seed_data.py
import asyncio
from datetime import date, timedelta
from decimal import Decimal
from warehouse.core.db import init_db, close_db
from warehouse.core.security import create_access_token
from warehouse.models.appointment import Appointment, AppointmentStatus
from warehouse.models.inventory import Category, InventoryItem, Supplier
from warehouse.models.ledger import StockTransaction, TransactionDirection
from warehouse.schemas.actor import Actor

SEED_ACTOR = Actor(id="1", name="Warehouse Admin", role="admin")


async def seed_item(name: str, category: str, quantity: int, supplier: Supplier, **defaults) -> InventoryItem:
    item, created = await InventoryItem.get_or_create(
        name=name, defaults={"category": category, "quantity": quantity, "supplier": supplier, **defaults}
    )
    # Opening balance must be explained by the ledger
    if created and quantity > 0:
        await StockTransaction.create(
            item_id=item.id,
            item_name=item.name,
            direction=TransactionDirection.IN,
            quantity=quantity,
            reason="Initial stock",
            user_id=SEED_ACTOR.id,
            user_name=SEED_ACTOR.name,
            user_role=SEED_ACTOR.role,
            stock_before=0,
            stock_after=quantity,
        )
    return item


async def seed():
    supplier, _ = await Supplier.get_or_create(
        name="Metro Office Supplies", defaults={"contact_person": "Ana Cruz", "is_active": True}
    )
    print("Supplier:", supplier.id)

    for name in ("Paper", "Electronics"):
        await Category.get_or_create(name=name)

    paper = await seed_item("A4 Bond Paper", "Paper", 120, supplier, location="Aisle 1", unit_price=Decimal("215.00"))
    printer = await seed_item("HP Printer", "Electronics", 4, supplier, location="Aisle 7", unit_price=Decimal("8999.00"), reorder_level=2)
    print("Items:", paper.id, printer.id)

    appointment, _ = await Appointment.get_or_create(
        supplier_id=supplier.id,
        supplier_name=supplier.name,
        status=AppointmentStatus.PENDING,
        defaults={
            "date": date.today() + timedelta(days=3),
            "time": "09:30",
            "items": [
                {"item_id": paper.id, "item_name": paper.name, "quantity": 50},
                {"item_id": printer.id, "item_name": printer.name, "quantity": 3},
            ],
            "scheduled_by": SEED_ACTOR.name,
        },
    )
    print("Pending appointment:", appointment.id)
    print("Dev bearer token:", create_access_token(SEED_ACTOR))


async def main():
    await init_db()
    await seed()
    await close_db()

if __name__ == "__main__":
    asyncio.run(main())
