import logging
from fastapi import APIRouter, Depends, HTTPException, status
from warehouse.core.errors import WarehouseError
from warehouse.core.security import get_current_actor
from warehouse.schemas.actor import Actor
from warehouse.schemas.inventory import InventoryItemCreate, InventoryItemResponse, InventoryItemUpdate
from warehouse.schemas.response import MessageResponse, SuccessResponse
from warehouse.services.inventory_service import (
    create_item,
    delete_item,
    get_item,
    list_items,
    update_item,
    verify_ledger,
)

log = logging.getLogger(__name__)

router = APIRouter()


def _serialize(item) -> dict:
    return InventoryItemResponse.model_validate(item).model_dump(mode="json")


@router.get("/", response_model=SuccessResponse)
async def list_inventory(actor: Actor = Depends(get_current_actor)):
    """Lists every stock-keeping unit, newest first."""
    items = await list_items()
    return SuccessResponse(data=[_serialize(i) for i in items])


@router.get("/{item_id}", response_model=SuccessResponse)
async def get_inventory_item(item_id: int, actor: Actor = Depends(get_current_actor)):
    """Fetches the current stock record for one item."""
    item = await get_item(item_id)
    return SuccessResponse(data=_serialize(item))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_inventory_item(item_data: InventoryItemCreate, actor: Actor = Depends(get_current_actor)):
    """
    Adds a new item. A non-zero starting quantity is booked as an 'Initial stock'
    ledger entry so the ledger always explains the on-hand quantity.
    """
    try:
        item = await create_item(item_data, actor)
        return SuccessResponse(data=_serialize(item))
    except WarehouseError:
        raise
    except Exception as e:
        log.error(f"Error adding inventory item: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server failed to add item."
        )


@router.put("/{item_id}", response_model=SuccessResponse)
async def edit_inventory_item(item_id: int, item_data: InventoryItemUpdate, actor: Actor = Depends(get_current_actor)):
    """Direct edit. A changed quantity is recorded as a manual stock correction."""
    try:
        item = await update_item(item_id, item_data, actor)
        return SuccessResponse(data=_serialize(item))
    except WarehouseError:
        raise
    except Exception as e:
        log.error(f"Error updating inventory item {item_id}: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Server failed to update item."
        )


@router.delete("/{item_id}", response_model=SuccessResponse)
async def remove_inventory_item(item_id: int, actor: Actor = Depends(get_current_actor)):
    await delete_item(item_id, actor)
    return SuccessResponse(data=MessageResponse(message="Item deleted successfully").model_dump())


@router.get("/{item_id}/ledger-check", response_model=SuccessResponse)
async def check_item_ledger(item_id: int, actor: Actor = Depends(get_current_actor)):
    """Replays the item's transaction ledger and compares it with the stored quantity."""
    report = await verify_ledger(item_id)
    if not report.consistent:
        log.warning(f"Ledger mismatch for item {item_id}: {report.problems}")
    return SuccessResponse(data=report.model_dump())
