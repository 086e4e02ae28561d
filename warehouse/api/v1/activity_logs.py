from fastapi import APIRouter, Depends

from warehouse.core.security import get_current_actor
from warehouse.schemas.activity_log import ActivityLogResponse
from warehouse.schemas.actor import Actor
from warehouse.schemas.response import SuccessResponse
from warehouse.services.activity_log_service import list_activity

router = APIRouter()


@router.get("/", response_model=SuccessResponse)
async def list_activity_logs(actor: Actor = Depends(get_current_actor)):
    """Most recent audit entries first."""
    entries = await list_activity()
    return SuccessResponse(
        data=[ActivityLogResponse.model_validate(e).model_dump(mode="json") for e in entries]
    )
