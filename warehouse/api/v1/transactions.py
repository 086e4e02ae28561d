import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, status

from warehouse.core.errors import WarehouseError
from warehouse.core.security import get_current_actor
from warehouse.schemas.actor import Actor
from warehouse.schemas.inventory import StockMovementRequest, StockTransactionResponse
from warehouse.schemas.response import SuccessResponse
from warehouse.services.inventory_service import list_transactions, record_movement

log = logging.getLogger(__name__)

router = APIRouter()


def _serialize(txn) -> dict:
    return StockTransactionResponse.model_validate(txn).model_dump(mode="json")


@router.get("/", response_model=SuccessResponse)
async def list_transactions_endpoint(item_id: Optional[int] = None, actor: Actor = Depends(get_current_actor)):
    """Ledger rows, newest first. Pass ?item_id= to see a single item's history."""
    rows = await list_transactions(item_id)
    return SuccessResponse(data=[_serialize(t) for t in rows])


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def record_transaction_endpoint(movement: StockMovementRequest, actor: Actor = Depends(get_current_actor)):
    """Records a manual stock IN/OUT. OUT movements that would go below zero are rejected."""
    try:
        txn = await record_movement(movement, actor)
        return SuccessResponse(data=_serialize(txn))
    except WarehouseError as e:
        log.error(f"Rejected stock movement for item {movement.item_id}: {e.message}")
        raise
    except Exception as e:
        log.error(f"Error recording transaction: {e}")
        raise HTTPException(status_code=500, detail="Server failed to record transaction.")
