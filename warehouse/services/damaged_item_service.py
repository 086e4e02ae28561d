"""Damage reports raised when an item is marked Damaged, and their follow-up."""
import logging
from typing import Any, List

from warehouse.core.errors import NotFound
from warehouse.models.damaged_item import DamagedItem
from warehouse.models.inventory import InventoryItem
from warehouse.schemas.actor import Actor
from warehouse.schemas.damaged_item import DamagedItemUpdate
from warehouse.services.activity_log_service import record_activity

log = logging.getLogger(__name__)


async def report_damage(conn: Any, item: InventoryItem, actor: Actor) -> DamagedItem:
    """Opens a report inside the caller's unit of work, snapshotting the item's name and quantity."""
    return await DamagedItem.create(
        item_id=item.id,
        item_name=item.name,
        quantity=item.quantity,
        reported_by=actor.name,
        using_db=conn,
    )


async def list_damaged_items() -> List[DamagedItem]:
    return await DamagedItem.all().order_by("-id")


async def get_damaged_item(report_id: int) -> DamagedItem:
    report = await DamagedItem.get_or_none(id=report_id)
    if not report:
        raise NotFound(f"Damaged item {report_id} not found.")
    return report


async def update_damaged_item(report_id: int, data: DamagedItemUpdate, actor: Actor) -> DamagedItem:
    report = await get_damaged_item(report_id)
    report.status = data.status
    report.notes = data.notes
    await report.save(update_fields=["status", "notes", "updated_at"])

    log.info(f"Damage report {report_id} for '{report.item_name}' set to '{data.status}' by {actor.name}.")
    await record_activity(report.item_name, "Damage Updated", actor, f"Status: {data.status}")
    return report


async def remove_damaged_item(report_id: int, actor: Actor) -> None:
    """Drops the report only; the inventory item keeps its damaged flag until edited."""
    report = await get_damaged_item(report_id)
    await report.delete()
    await record_activity(report.item_name, "Damage Removed", actor, f"Removed damage report #{report_id}")
