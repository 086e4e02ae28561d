"""Supplier and category records referenced by items and appointments."""
from typing import List

from tortoise.exceptions import IntegrityError

from warehouse.core.errors import Conflict, NotFound
from warehouse.models.inventory import Category, Supplier
from warehouse.schemas.inventory import CategoryRequest, SupplierRequest


async def list_suppliers() -> List[Supplier]:
    return await Supplier.all().order_by("-id")


async def get_supplier(supplier_id: int) -> Supplier:
    supplier = await Supplier.get_or_none(id=supplier_id)
    if not supplier:
        raise NotFound(f"Supplier {supplier_id} not found.")
    return supplier


async def create_supplier(data: SupplierRequest) -> Supplier:
    return await Supplier.create(**data.model_dump())


async def update_supplier(supplier_id: int, data: SupplierRequest) -> Supplier:
    supplier = await get_supplier(supplier_id)
    supplier.update_from_dict(data.model_dump())
    await supplier.save()
    return supplier


async def delete_supplier(supplier_id: int) -> None:
    # Items keep existing with supplier cleared; appointments hold a name snapshot
    supplier = await get_supplier(supplier_id)
    await supplier.delete()


async def list_categories() -> List[Category]:
    return await Category.all().order_by("-id")


async def create_category(data: CategoryRequest) -> Category:
    try:
        return await Category.create(**data.model_dump())
    except IntegrityError as e:
        raise Conflict(f"Category '{data.name}' already exists.") from e


async def get_category(category_id: int) -> Category:
    category = await Category.get_or_none(id=category_id)
    if not category:
        raise NotFound(f"Category {category_id} not found.")
    return category


async def update_category(category_id: int, data: CategoryRequest) -> Category:
    """Renames/re-describes a category. Items keep the category text they were filed under."""
    category = await get_category(category_id)
    if await Category.filter(name=data.name).exclude(id=category_id).exists():
        raise Conflict(f"Category '{data.name}' already exists.")
    category.update_from_dict(data.model_dump())
    try:
        await category.save()
    except IntegrityError as e:
        raise Conflict(f"Category '{data.name}' already exists.") from e
    return category


async def delete_category(category_id: int) -> None:
    category = await get_category(category_id)
    await category.delete()
