import logging

from tortoise import timezone

from warehouse.core.db import unit_of_work
from warehouse.core.errors import Conflict, InvalidState, NotFound
from warehouse.models.appointment import Appointment, AppointmentStatus, TERMINAL_STATUSES
from warehouse.models.ledger import TransactionDirection
from warehouse.schemas.actor import Actor
from warehouse.schemas.appointment import CompletionSummary
from warehouse.services.activity_log_service import record_activities
from warehouse.services.appointment_service import parse_line_items
from warehouse.services.inventory_service import adjust_quantity, lock_items, write_ledger_entry

log = logging.getLogger(__name__)

OPEN_STATUSES = [AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED]


async def _load_open_appointment(appointment_id: int, conn) -> Appointment:
    """Loads and row-locks the appointment, rejecting missing or terminal records."""
    appointment = await (
        Appointment.filter(id=appointment_id).using_db(conn).select_for_update().first()
    )
    if not appointment:
        raise NotFound(f"Appointment {appointment_id} not found.")

    if appointment.status in TERMINAL_STATUSES:
        raise InvalidState(
            f"Appointment {appointment_id} is already {appointment.status.value}. "
            "Re-fetch its state before retrying."
        )
    return appointment


async def _close_appointment(appointment_id: int, new_status: AppointmentStatus, conn) -> None:
    """
    Compare-and-swap on status: only an open appointment can be closed.
    Zero updated rows means someone else closed it first.
    """
    updated = await Appointment.filter(
        id=appointment_id, status__in=OPEN_STATUSES
    ).using_db(conn).update(status=new_status, updated_at=timezone.now())
    if updated != 1:
        raise Conflict(f"Appointment {appointment_id} was modified concurrently. Re-fetch and retry.")


async def complete_appointment(appointment_id: int, actor: Actor) -> CompletionSummary:
    """
    Receives a restock appointment. In one unit of work: every line item's quantity is
    increased, one IN ledger row is written per line item, and the appointment flips to
    completed. Any failure rolls all of it back, leaving status and quantities untouched.
    """
    async with unit_of_work() as conn:
        appointment = await _load_open_appointment(appointment_id, conn)
        line_items = parse_line_items(appointment.items)
        if not line_items:
            raise InvalidState(f"Appointment {appointment_id} has no line items to receive.")

        # Lock every referenced row up front, in id order, before touching any quantity
        await lock_items((li.item_id for li in line_items), conn)

        reason = f"Restock from appointment #{appointment.id} with {appointment.supplier_name}"
        for li in line_items:
            stock_after = await adjust_quantity(li.item_id, li.quantity, conn)
            await write_ledger_entry(
                conn,
                item_id=li.item_id,
                item_name=li.item_name,
                direction=TransactionDirection.IN,
                quantity=li.quantity,
                stock_after=stock_after,
                reason=reason,
                actor=actor,
                appointment_id=appointment.id,
            )

        await _close_appointment(appointment.id, AppointmentStatus.COMPLETED, conn)

    total_units = sum(li.quantity for li in line_items)
    log.info(
        f"Appointment {appointment_id} completed by {actor.name}: "
        f"{len(line_items)} items, {total_units} units received."
    )

    # Audit entries are written after commit; their failure cannot undo the restock
    await record_activities(
        (
            (li.item_name,
             f"Completed restock appointment with {appointment.supplier_name} "
             f"- Received {li.quantity} units")
            for li in line_items
        ),
        "Appointment Completed",
        actor,
    )

    return CompletionSummary(
        message="Appointment completed successfully",
        items_restocked=len(line_items),
        total_units=total_units,
    )


async def cancel_appointment(appointment_id: int, actor: Actor) -> str:
    """Calls off an open appointment. Never touches quantities or the ledger."""
    async with unit_of_work() as conn:
        appointment = await _load_open_appointment(appointment_id, conn)
        await _close_appointment(appointment.id, AppointmentStatus.CANCELLED, conn)

    log.info(f"Appointment {appointment_id} cancelled by {actor.name}.")

    await record_activities(
        (
            (li.item_name,
             f"Cancelled restock appointment with {appointment.supplier_name} "
             f"scheduled for {appointment.date}")
            for li in parse_line_items(appointment.items)
        ),
        "Appointment Cancelled",
        actor,
    )
    return "Appointment cancelled successfully"
