import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from warehouse.core.errors import WarehouseError
from warehouse.core.security import get_current_actor
from warehouse.models.appointment import AppointmentStatus
from warehouse.schemas.actor import Actor
from warehouse.schemas.appointment import AppointmentCreate, AppointmentResponse, AppointmentUpdate
from warehouse.schemas.response import MessageResponse, SuccessResponse
from warehouse.services.appointment_service import (
    create_appointment,
    get_appointment,
    list_appointments,
    update_appointment,
)
from warehouse.services.completion_service import cancel_appointment, complete_appointment

router = APIRouter()
log = logging.getLogger(__name__)


def _serialize(appointment) -> dict:
    return AppointmentResponse.model_validate(appointment).model_dump(mode="json")


@router.get("/", response_model=SuccessResponse)
async def list_appointments_endpoint(
    status_filter: Optional[AppointmentStatus] = Query(None, alias="status"),
    actor: Actor = Depends(get_current_actor),
):
    """Lists appointments in schedule order, optionally filtered by status (?status=pending)."""
    appointments = await list_appointments(status_filter)
    return SuccessResponse(data=[_serialize(a) for a in appointments])


@router.get("/{appointment_id}", response_model=SuccessResponse)
async def get_appointment_endpoint(appointment_id: int, actor: Actor = Depends(get_current_actor)):
    appointment = await get_appointment(appointment_id)
    return SuccessResponse(data=_serialize(appointment))


@router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def create_appointment_endpoint(
    request_data: AppointmentCreate,
    actor: Actor = Depends(get_current_actor),
):
    """Schedules a restock appointment with a supplier."""
    try:
        appointment = await create_appointment(request_data, actor)
        return SuccessResponse(data=_serialize(appointment))
    except WarehouseError as e:
        log.error(f"Error scheduling appointment: {e.message}")
        raise
    except Exception as e:
        log.error(f"Error scheduling appointment: {e}")
        raise HTTPException(status_code=500, detail="Server failed to schedule appointment.")


@router.put("/{appointment_id}", response_model=SuccessResponse)
async def update_appointment_endpoint(
    appointment_id: int,
    payload: AppointmentUpdate,
    actor: Actor = Depends(get_current_actor),
):
    """Edits a pending/confirmed appointment (date, time, notes, line items, confirmation)."""
    try:
        appointment = await update_appointment(appointment_id, payload, actor)
        return SuccessResponse(data=_serialize(appointment))
    except WarehouseError as e:
        log.error(f"Error updating appointment {appointment_id}: {e.message}")
        raise
    except Exception as e:
        log.error(f"Error updating appointment {appointment_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to update appointment.")


@router.post("/{appointment_id}/complete", response_model=SuccessResponse)
async def complete_appointment_endpoint(appointment_id: int, actor: Actor = Depends(get_current_actor)):
    """
    Marks the appointment completed and restocks every line item atomically.
    Returns itemsRestocked and totalUnits.
    """
    try:
        summary = await complete_appointment(appointment_id, actor)
        return SuccessResponse(data=summary.model_dump(by_alias=True))
    except WarehouseError as e:
        log.error(f"Error completing appointment {appointment_id}: {e.message}")
        raise
    except Exception as e:
        log.error(f"Error completing appointment {appointment_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to complete appointment.")


@router.post("/{appointment_id}/cancel", response_model=SuccessResponse)
async def cancel_appointment_endpoint(appointment_id: int, actor: Actor = Depends(get_current_actor)):
    """Cancels the appointment. Inventory is not touched."""
    try:
        message = await cancel_appointment(appointment_id, actor)
        return SuccessResponse(data=MessageResponse(message=message).model_dump())
    except WarehouseError as e:
        log.error(f"Error cancelling appointment {appointment_id}: {e.message}")
        raise
    except Exception as e:
        log.error(f"Error cancelling appointment {appointment_id}: {e}")
        raise HTTPException(status_code=500, detail="Server failed to cancel appointment.")
