import logging
from typing import Any, Dict, Iterable, List, Optional

from warehouse.core.config import ALLOW_NEGATIVE_STOCK
from warehouse.core.db import unit_of_work
from warehouse.core.errors import Conflict, NotFound
from warehouse.models.inventory import DamagedStatus, InventoryItem, Supplier
from warehouse.models.ledger import StockTransaction, TransactionDirection
from warehouse.schemas.actor import Actor
from warehouse.schemas.inventory import (
    InventoryItemCreate,
    InventoryItemUpdate,
    LedgerReport,
    StockMovementRequest,
)
from warehouse.services.activity_log_service import record_activity
from warehouse.services.damaged_item_service import report_damage

log = logging.getLogger(__name__)


# ----------- Reads -----------

async def get_item(item_id: int) -> InventoryItem:
    item = await InventoryItem.get_or_none(id=item_id)
    if not item:
        raise NotFound(f"Inventory item {item_id} not found.")
    return item


async def list_items() -> List[InventoryItem]:
    return await InventoryItem.all().order_by("-id")


async def list_transactions(item_id: Optional[int] = None) -> List[StockTransaction]:
    query = StockTransaction.all()
    if item_id is not None:
        query = query.filter(item_id=item_id)
    return await query.order_by("-timestamp", "-id")


# ----------- Row-level primitives (run inside the caller's unit of work) -----------

async def lock_items(item_ids: Iterable[int], conn: Any) -> Dict[int, InventoryItem]:
    """
    Locks every referenced item row for the rest of the transaction.
    Rows are locked in ascending id order so two units of work touching
    overlapping items always acquire their locks in the same order.
    """
    wanted = sorted(set(item_ids))
    locked = await (
        InventoryItem.filter(id__in=wanted).order_by("id").using_db(conn).select_for_update()
    )
    found = {item.id: item for item in locked}
    missing = [i for i in wanted if i not in found]
    if missing:
        raise NotFound(f"Inventory item(s) {', '.join(str(i) for i in missing)} not found.")
    return found


async def adjust_quantity(item_id: int, delta: int, conn: Any) -> int:
    """
    Read-modify-write of one item's quantity under a row lock. Returns the new quantity.
    Raises NotFound if the item is gone and Conflict if the result would be negative
    (unless negative stock is allowed by configuration).
    """
    item = await InventoryItem.filter(id=item_id).using_db(conn).select_for_update().first()
    if item is None:
        raise NotFound(f"Inventory item {item_id} not found.")

    new_quantity = item.quantity + delta
    if new_quantity < 0 and not ALLOW_NEGATIVE_STOCK:
        raise Conflict(
            f"Insufficient stock for '{item.name}'. Requested: {-delta}, Available: {item.quantity}"
        )

    item.quantity = new_quantity
    await item.save(update_fields=["quantity", "updated_at"], using_db=conn)
    return new_quantity


async def write_ledger_entry(
    conn: Any,
    item_id: int,
    item_name: str,
    direction: TransactionDirection,
    quantity: int,
    stock_after: int,
    reason: str,
    actor: Actor,
    appointment_id: Optional[int] = None,
) -> StockTransaction:
    """Inserts the ledger row for a quantity change that was just applied."""
    signed = quantity if direction == TransactionDirection.IN else -quantity
    return await StockTransaction.create(
        item_id=item_id,
        item_name=item_name,
        direction=direction,
        quantity=quantity,
        reason=reason,
        user_id=actor.id,
        user_name=actor.name,
        user_role=actor.role,
        stock_before=stock_after - signed,
        stock_after=stock_after,
        appointment_id=appointment_id,
        using_db=conn,
    )


async def _apply_movement(
    conn: Any,
    item: InventoryItem,
    direction: TransactionDirection,
    quantity: int,
    reason: str,
    actor: Actor,
) -> StockTransaction:
    delta = quantity if direction == TransactionDirection.IN else -quantity
    stock_after = await adjust_quantity(item.id, delta, conn)
    return await write_ledger_entry(conn, item.id, item.name, direction, quantity, stock_after, reason, actor)


# ----------- Stock movements -----------

async def record_movement(movement: StockMovementRequest, actor: Actor) -> StockTransaction:
    """Manual stock IN/OUT: quantity change and ledger row commit together."""
    async with unit_of_work() as conn:
        item = await InventoryItem.get_or_none(id=movement.item_id, using_db=conn)
        if not item:
            raise NotFound(f"Inventory item {movement.item_id} not found.")
        txn = await _apply_movement(conn, item, movement.direction, movement.quantity, movement.reason, actor)

    log.info(
        f"Stock {movement.direction.value} of {movement.quantity} for item {item.id}: "
        f"{txn.stock_before} -> {txn.stock_after}"
    )
    await record_activity(
        item.name, "Transaction", actor,
        f"{movement.direction.value}: {movement.quantity} units - {movement.reason}",
    )
    return txn


async def set_quantity(item_id: int, absolute: int, actor: Actor) -> InventoryItem:
    """
    Direct-edit path. The difference to the current quantity is written to the
    ledger as a correction so replaying the ledger still yields the quantity.
    """
    if absolute < 0:
        raise Conflict("Quantity cannot be negative.")

    async with unit_of_work() as conn:
        item = await _set_quantity_in(conn, item_id, absolute, actor)
    return item


async def _set_quantity_in(conn: Any, item_id: int, absolute: int, actor: Actor) -> InventoryItem:
    item = await InventoryItem.filter(id=item_id).using_db(conn).select_for_update().first()
    if item is None:
        raise NotFound(f"Inventory item {item_id} not found.")

    delta = absolute - item.quantity
    if delta != 0:
        direction = TransactionDirection.IN if delta > 0 else TransactionDirection.OUT
        await _apply_movement(conn, item, direction, abs(delta), "Manual stock correction", actor)
        item.quantity = absolute
    return item


# ----------- Item records -----------

async def _check_supplier(supplier_id: Optional[int], conn: Any = None) -> None:
    if supplier_id is not None and not await Supplier.filter(id=supplier_id).using_db(conn).exists():
        raise NotFound(f"Supplier {supplier_id} not found.")


async def create_item(data: InventoryItemCreate, actor: Actor) -> InventoryItem:
    async with unit_of_work() as conn:
        await _check_supplier(data.supplier_id, conn)
        item = await InventoryItem.create(
            name=data.name,
            category=data.category,
            quantity=data.quantity,
            reorder_level=data.reorder_level,
            unit_price=data.unit_price,
            location=data.location,
            damaged_status=data.damaged_status,
            supplier_id=data.supplier_id,
            using_db=conn,
        )
        # Opening balance goes through the ledger like any other stock change
        if data.quantity > 0:
            await write_ledger_entry(
                conn, item.id, item.name, TransactionDirection.IN,
                data.quantity, data.quantity, "Initial stock", actor,
            )
        if item.damaged_status == DamagedStatus.DAMAGED:
            await report_damage(conn, item, actor)

    await record_activity(item.name, "Added", actor, f"Added new item: {item.name}")
    return item


async def update_item(item_id: int, data: InventoryItemUpdate, actor: Actor) -> InventoryItem:
    # supplier_id may be cleared explicitly; other columns are not nullable
    changes = {
        k: v for k, v in data.model_dump(exclude_unset=True).items()
        if v is not None or k == "supplier_id"
    }
    quantity = changes.pop("quantity", None)

    async with unit_of_work() as conn:
        item = await InventoryItem.filter(id=item_id).using_db(conn).select_for_update().first()
        if not item:
            raise NotFound(f"Inventory item {item_id} not found.")
        if "supplier_id" in changes:
            await _check_supplier(changes["supplier_id"], conn)
        was_damaged = item.damaged_status == DamagedStatus.DAMAGED

        if changes:
            item.update_from_dict(changes)
            await item.save(using_db=conn)
        if quantity is not None:
            item = await _set_quantity_in(conn, item_id, quantity, actor)

        # Only the Good -> Damaged edge opens a report
        newly_damaged = not was_damaged and item.damaged_status == DamagedStatus.DAMAGED
        if newly_damaged:
            await report_damage(conn, item, actor)

    await record_activity(item.name, "Edited", actor, f"Updated item: {item.name}")
    if newly_damaged:
        await record_activity(item.name, "Marked Damaged", actor, f"{item.quantity} units on hand")
    return item


async def delete_item(item_id: int, actor: Actor) -> None:
    """Removes the item. Ledger rows keep their item_id/item_name snapshot."""
    async with unit_of_work() as conn:
        item = await InventoryItem.filter(id=item_id).using_db(conn).select_for_update().first()
        if not item:
            raise NotFound(f"Inventory item {item_id} not found.")
        await item.delete(using_db=conn)

    await record_activity(item.name, "Deleted", actor, f"Deleted item: {item.name}")


# ----------- Ledger consistency -----------

async def verify_ledger(item_id: int) -> LedgerReport:
    """
    Replays the item's ledger in (timestamp, id) order. Every row must carry the
    right delta and start where the previous one ended, and the last stock_after
    (zero when there are no rows) must equal the current quantity.
    """
    item = await get_item(item_id)
    rows = await StockTransaction.filter(item_id=item_id).order_by("timestamp", "id")

    problems = []
    running = 0
    for row in rows:
        if row.stock_after - row.stock_before != row.signed_quantity:
            problems.append(
                f"Transaction {row.id}: {row.direction.value} {row.quantity} "
                f"does not match {row.stock_before} -> {row.stock_after}"
            )
        if row.stock_before != running:
            problems.append(
                f"Transaction {row.id}: starts at {row.stock_before}, previous balance was {running}"
            )
        running = row.stock_after

    if running != item.quantity:
        problems.append(f"Replayed quantity {running} differs from current quantity {item.quantity}")

    return LedgerReport(
        item_id=item_id,
        consistent=not problems,
        quantity=item.quantity,
        replayed_quantity=running,
        transactions=len(rows),
        problems=problems,
    )
