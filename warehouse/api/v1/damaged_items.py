from fastapi import APIRouter, Depends
from warehouse.core.security import get_current_actor
from warehouse.schemas.actor import Actor
from warehouse.schemas.damaged_item import DamagedItemResponse, DamagedItemUpdate
from warehouse.schemas.response import MessageResponse, SuccessResponse
from warehouse.services.damaged_item_service import (
    list_damaged_items,
    remove_damaged_item,
    update_damaged_item,
)

router = APIRouter()


def _serialize(report) -> dict:
    return DamagedItemResponse.model_validate(report).model_dump(mode="json")


@router.get("/", response_model=SuccessResponse)
async def list_damage_reports(actor: Actor = Depends(get_current_actor)):
    """Damage reports, newest first."""
    reports = await list_damaged_items()
    return SuccessResponse(data=[_serialize(r) for r in reports])


@router.put("/{report_id}", response_model=SuccessResponse)
async def edit_damage_report(report_id: int, payload: DamagedItemUpdate, actor: Actor = Depends(get_current_actor)):
    """Records follow-up status and notes for a damaged item."""
    report = await update_damaged_item(report_id, payload, actor)
    return SuccessResponse(data=_serialize(report))


@router.delete("/{report_id}", response_model=SuccessResponse)
async def remove_damage_report(report_id: int, actor: Actor = Depends(get_current_actor)):
    await remove_damaged_item(report_id, actor)
    return SuccessResponse(data=MessageResponse(message="Damaged item removed successfully").model_dump())
