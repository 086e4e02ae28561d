import pytest
from unittest.mock import AsyncMock, patch

from tortoise.exceptions import IntegrityError

from warehouse.core.errors import Conflict, NotFound
from warehouse.models.activity_log import ActivityLog
from warehouse.models.damaged_item import DamagedItem
from warehouse.models.inventory import DamagedStatus
from warehouse.schemas.damaged_item import DamagedItemUpdate
from warehouse.schemas.inventory import CategoryRequest, InventoryItemUpdate
from warehouse.services import catalog_service
from warehouse.services.activity_log_service import record_activities
from warehouse.services.damaged_item_service import (
    list_damaged_items,
    remove_damaged_item,
    update_damaged_item,
)
from warehouse.services.inventory_service import get_item, update_item


@pytest.mark.asyncio
async def test_update_category(db):
    paper = await catalog_service.create_category(CategoryRequest(name="Paper"))

    updated = await catalog_service.update_category(
        paper.id, CategoryRequest(name="Paper Goods", description="Reams and envelopes")
    )

    assert updated.name == "Paper Goods"
    assert [c.name for c in await catalog_service.list_categories()] == ["Paper Goods"]


@pytest.mark.asyncio
async def test_update_category_guards(db):
    paper = await catalog_service.create_category(CategoryRequest(name="Paper"))
    await catalog_service.create_category(CategoryRequest(name="Electronics"))

    with pytest.raises(NotFound):
        await catalog_service.update_category(404, CategoryRequest(name="Anything"))
    with pytest.raises(Conflict):
        await catalog_service.update_category(paper.id, CategoryRequest(name="Electronics"))
    # Keeping its own name is not a clash
    same = await catalog_service.update_category(paper.id, CategoryRequest(name="Paper", description="A4"))
    assert same.description == "A4"


@pytest.mark.asyncio
async def test_duplicate_category_keeps_cause(db):
    await catalog_service.create_category(CategoryRequest(name="Paper"))

    with pytest.raises(Conflict) as exc_info:
        await catalog_service.create_category(CategoryRequest(name="Paper"))

    assert isinstance(exc_info.value.__cause__, IntegrityError)


@pytest.mark.asyncio
async def test_damage_report_follow_up(make_item, actor):
    item = await make_item("HP Printer", quantity=4)
    await update_item(item.id, InventoryItemUpdate(damaged_status=DamagedStatus.DAMAGED), actor)
    report = (await list_damaged_items())[0]

    updated = await update_damaged_item(
        report.id, DamagedItemUpdate(status="Returned to supplier", notes="RMA 5521"), actor
    )
    assert (updated.status, updated.notes) == ("Returned to supplier", "RMA 5521")

    await remove_damaged_item(report.id, actor)
    assert await DamagedItem.all().count() == 0
    # The item itself is untouched
    assert (await get_item(item.id)).damaged_status == DamagedStatus.DAMAGED

    with pytest.raises(NotFound):
        await update_damaged_item(report.id, DamagedItemUpdate(status="Disposed"), actor)
    with pytest.raises(NotFound):
        await remove_damaged_item(report.id, actor)


@pytest.mark.asyncio
async def test_record_activities_continues_past_failed_entry(db, actor):
    real_create = ActivityLog.create
    calls = []

    async def flaky_create(**kwargs):
        calls.append(kwargs["item_name"])
        if kwargs["item_name"] == "Stapler":
            raise RuntimeError("audit store down")
        return await real_create(**kwargs)

    with patch.object(ActivityLog, "create", AsyncMock(side_effect=flaky_create)):
        await record_activities(
            [("Envelope", "a"), ("Stapler", "b"), ("Toner", "c")], "Appointment Completed", actor
        )

    assert calls == ["Envelope", "Stapler", "Toner"]
    assert sorted(e.item_name for e in await ActivityLog.all()) == ["Envelope", "Toner"]
