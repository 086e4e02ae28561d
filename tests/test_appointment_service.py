import json
import pytest
from datetime import date
from pydantic import ValidationError

from warehouse.core.errors import InvalidState, NotFound
from warehouse.models.activity_log import ActivityLog
from warehouse.models.appointment import AppointmentStatus, can_transition
from warehouse.schemas.appointment import AppointmentCreate, AppointmentUpdate, LineItem
from warehouse.services.appointment_service import (
    create_appointment,
    get_appointment,
    list_appointments,
    parse_line_items,
    update_appointment,
)
from warehouse.services.completion_service import cancel_appointment


def _draft(**overrides):
    data = {
        "supplier_id": 3,
        "supplier_name": "Metro Office Supplies",
        "date": "2026-11-02",
        "time": "09:30",
        "items": [
            {"item_id": 1, "item_name": "A4 Bond Paper", "quantity": 50},
            {"item_id": 2, "item_name": "HP Printer", "quantity": 3},
        ],
        "notes": "Dock 2",
    }
    data.update(overrides)
    return AppointmentCreate(**data)


def test_transition_table():
    assert can_transition(AppointmentStatus.PENDING, AppointmentStatus.CONFIRMED)
    assert can_transition(AppointmentStatus.PENDING, AppointmentStatus.COMPLETED)
    assert can_transition(AppointmentStatus.CONFIRMED, AppointmentStatus.CANCELLED)
    assert not can_transition(AppointmentStatus.CONFIRMED, AppointmentStatus.PENDING)
    assert not can_transition(AppointmentStatus.COMPLETED, AppointmentStatus.CANCELLED)
    assert not can_transition(AppointmentStatus.CANCELLED, AppointmentStatus.PENDING)


def test_line_items_are_required():
    with pytest.raises(ValidationError):
        _draft(items=[])
    with pytest.raises(ValidationError):
        _draft(items=[{"item_id": 1, "item_name": "A4 Bond Paper", "quantity": 0}])
    with pytest.raises(ValidationError):
        AppointmentUpdate(items=[])


def test_slot_time_must_be_24h_clock():
    assert _draft(time="07:05:30").time == "07:05:30"
    for bad in ("9:30", "24:00", "12:60", "noon", "09:30:00.5"):
        with pytest.raises(ValidationError):
            _draft(time=bad)
    with pytest.raises(ValidationError):
        AppointmentUpdate(time="25:15")


def test_parse_line_items_from_json_text():
    raw = json.dumps([
        {"item_id": 2, "item_name": "HP Printer", "quantity": 3},
        {"item_id": 1, "item_name": "A4 Bond Paper", "quantity": 50},
    ])

    items = parse_line_items(raw)

    assert items == [
        LineItem(item_id=2, item_name="HP Printer", quantity=3),
        LineItem(item_id=1, item_name="A4 Bond Paper", quantity=50),
    ]


@pytest.mark.asyncio
async def test_create_defaults_to_pending(db, actor):
    appointment = await create_appointment(_draft(), actor)

    stored = await get_appointment(appointment.id)
    assert stored.status == AppointmentStatus.PENDING
    assert stored.scheduled_by == actor.name
    assert stored.date == date(2026, 11, 2)
    assert stored.time == "09:30"
    assert stored.notes == "Dock 2"
    # Order and every field survive the round trip through the JSON column
    assert parse_line_items(stored.items) == _draft().items
    assert await ActivityLog.filter(action="Appointment Scheduled").count() == 2


@pytest.mark.asyncio
async def test_create_rejects_terminal_status(db, actor):
    with pytest.raises(InvalidState):
        await create_appointment(_draft(status="completed"), actor)
    with pytest.raises(InvalidState):
        await create_appointment(_draft(status="cancelled"), actor)


@pytest.mark.asyncio
async def test_list_in_schedule_order(db, actor):
    late = await create_appointment(_draft(date="2026-11-05", time="08:00"), actor)
    afternoon = await create_appointment(_draft(date="2026-11-02", time="14:00"), actor)
    morning = await create_appointment(_draft(date="2026-11-02", time="09:00"), actor)
    await cancel_appointment(late.id, actor)

    everything = await list_appointments()
    pending = await list_appointments(AppointmentStatus.PENDING)

    assert [a.id for a in everything] == [morning.id, afternoon.id, late.id]
    assert [a.id for a in pending] == [morning.id, afternoon.id]


@pytest.mark.asyncio
async def test_update_rewrites_supplied_fields_only(db, actor):
    appointment = await create_appointment(_draft(), actor)

    updated = await update_appointment(
        appointment.id,
        AppointmentUpdate(
            status=AppointmentStatus.CONFIRMED,
            items=[LineItem(item_id=1, item_name="A4 Bond Paper", quantity=80)],
        ),
        actor,
    )

    stored = await get_appointment(appointment.id)
    assert updated.status == AppointmentStatus.CONFIRMED
    assert stored.status == AppointmentStatus.CONFIRMED
    assert stored.notes == "Dock 2"
    assert parse_line_items(stored.items) == [LineItem(item_id=1, item_name="A4 Bond Paper", quantity=80)]
    assert await ActivityLog.filter(action="Appointment Updated").count() == 1


@pytest.mark.asyncio
async def test_update_cannot_reach_terminal_or_go_backwards(db, actor):
    appointment = await create_appointment(_draft(status="confirmed"), actor)

    with pytest.raises(InvalidState):
        await update_appointment(appointment.id, AppointmentUpdate(status=AppointmentStatus.COMPLETED), actor)
    with pytest.raises(InvalidState):
        await update_appointment(appointment.id, AppointmentUpdate(status=AppointmentStatus.PENDING), actor)

    assert (await get_appointment(appointment.id)).status == AppointmentStatus.CONFIRMED


@pytest.mark.asyncio
async def test_terminal_appointment_is_frozen(db, actor):
    appointment = await create_appointment(_draft(), actor)
    await cancel_appointment(appointment.id, actor)

    with pytest.raises(InvalidState):
        await update_appointment(appointment.id, AppointmentUpdate(notes="reschedule"), actor)

    assert (await get_appointment(appointment.id)).notes == "Dock 2"


@pytest.mark.asyncio
async def test_unknown_appointment(db, actor):
    with pytest.raises(NotFound):
        await get_appointment(31337)
    with pytest.raises(NotFound):
        await update_appointment(31337, AppointmentUpdate(notes="x"), actor)
