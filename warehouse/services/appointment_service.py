import json
import logging
from typing import Any, List, Optional

from warehouse.core.db import unit_of_work
from warehouse.core.errors import InvalidState, NotFound
from warehouse.models.appointment import (
    Appointment,
    AppointmentStatus,
    TERMINAL_STATUSES,
    can_transition,
)
from warehouse.schemas.actor import Actor
from warehouse.schemas.appointment import AppointmentCreate, AppointmentUpdate, LineItem
from warehouse.services.activity_log_service import record_activities

log = logging.getLogger(__name__)


def parse_line_items(raw: Any) -> List[LineItem]:
    """Decodes the stored line-item column back into validated, ordered LineItems."""
    if isinstance(raw, (str, bytes)):
        raw = json.loads(raw)
    return [LineItem.model_validate(entry) for entry in raw or []]


def dump_line_items(items: List[LineItem]) -> List[dict]:
    return [item.model_dump() for item in items]


async def create_appointment(draft: AppointmentCreate, actor: Actor) -> Appointment:
    """Schedules a restock. Appointments always start in a non-terminal status."""
    if draft.status in TERMINAL_STATUSES:
        raise InvalidState(
            f"An appointment cannot be created as '{draft.status.value}'. "
            "Use the complete/cancel operations instead."
        )

    appointment = await Appointment.create(
        supplier_id=draft.supplier_id,
        supplier_name=draft.supplier_name,
        date=draft.date,
        time=draft.time,
        status=draft.status,
        items=dump_line_items(draft.items),
        notes=draft.notes,
        scheduled_by=actor.name,
    )
    log.info(f"Appointment {appointment.id} scheduled with {draft.supplier_name} by {actor.name}.")

    await record_activities(
        (
            (item.item_name,
             f"Restock appointment with {draft.supplier_name} on {draft.date} at {draft.time} "
             f"- Quantity: {item.quantity}")
            for item in draft.items
        ),
        "Appointment Scheduled",
        actor,
    )
    return appointment


async def get_appointment(appointment_id: int) -> Appointment:
    appointment = await Appointment.get_or_none(id=appointment_id)
    if not appointment:
        raise NotFound(f"Appointment {appointment_id} not found.")
    return appointment


async def list_appointments(status: Optional[AppointmentStatus] = None) -> List[Appointment]:
    """Appointments in schedule order (date, then time)."""
    query = Appointment.all()
    if status is not None:
        query = query.filter(status=status)
    return await query.order_by("date", "time", "id")


async def update_appointment(appointment_id: int, fields: AppointmentUpdate, actor: Actor) -> Appointment:
    """
    Rewrites the supplied fields of a pending/confirmed appointment.
    Terminal statuses are only reachable through the completion coordinator.
    """
    changes = {k: v for k, v in fields.model_dump(exclude_unset=True).items() if v is not None}

    async with unit_of_work() as conn:
        appointment = await (
            Appointment.filter(id=appointment_id).using_db(conn).select_for_update().first()
        )
        if not appointment:
            raise NotFound(f"Appointment {appointment_id} not found.")

        if appointment.is_terminal:
            raise InvalidState(
                f"Appointment {appointment_id} is already {appointment.status.value} and cannot be modified."
            )

        new_status = changes.get("status")
        if new_status is not None and new_status != appointment.status:
            if new_status in TERMINAL_STATUSES or not can_transition(appointment.status, new_status):
                raise InvalidState(
                    f"Cannot move appointment {appointment_id} from "
                    f"{appointment.status.value} to {AppointmentStatus(new_status).value} by editing it."
                )

        if "items" in changes:
            changes["items"] = dump_line_items(fields.items)

        appointment.update_from_dict(changes)
        await appointment.save(using_db=conn)

    log.info(f"Appointment {appointment_id} updated by {actor.name}: {sorted(changes)}")
    await record_activities(
        (
            (item.item_name,
             f"Updated restock appointment with {appointment.supplier_name} "
             f"on {appointment.date} at {appointment.time}")
            for item in parse_line_items(appointment.items)
        ),
        "Appointment Updated",
        actor,
    )
    return appointment
