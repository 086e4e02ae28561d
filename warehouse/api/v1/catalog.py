from fastapi import APIRouter, Depends, status

from warehouse.core.security import get_current_actor
from warehouse.schemas.actor import Actor
from warehouse.schemas.inventory import CategoryRequest, CategoryResponse, SupplierRequest, SupplierResponse
from warehouse.schemas.response import MessageResponse, SuccessResponse
from warehouse.services import catalog_service

suppliers_router = APIRouter()
categories_router = APIRouter()


# ----------- Suppliers -----------

@suppliers_router.get("/", response_model=SuccessResponse)
async def list_suppliers(actor: Actor = Depends(get_current_actor)):
    suppliers = await catalog_service.list_suppliers()
    return SuccessResponse(data=[SupplierResponse.model_validate(s).model_dump() for s in suppliers])


@suppliers_router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_supplier(payload: SupplierRequest, actor: Actor = Depends(get_current_actor)):
    supplier = await catalog_service.create_supplier(payload)
    return SuccessResponse(data=SupplierResponse.model_validate(supplier).model_dump())


@suppliers_router.put("/{supplier_id}", response_model=SuccessResponse)
async def edit_supplier(supplier_id: int, payload: SupplierRequest, actor: Actor = Depends(get_current_actor)):
    supplier = await catalog_service.update_supplier(supplier_id, payload)
    return SuccessResponse(data=SupplierResponse.model_validate(supplier).model_dump())


@suppliers_router.delete("/{supplier_id}", response_model=SuccessResponse)
async def remove_supplier(supplier_id: int, actor: Actor = Depends(get_current_actor)):
    await catalog_service.delete_supplier(supplier_id)
    return SuccessResponse(data=MessageResponse(message="Supplier deleted successfully").model_dump())


# ----------- Categories -----------

@categories_router.get("/", response_model=SuccessResponse)
async def list_categories(actor: Actor = Depends(get_current_actor)):
    categories = await catalog_service.list_categories()
    return SuccessResponse(data=[CategoryResponse.model_validate(c).model_dump() for c in categories])


@categories_router.post("/", status_code=status.HTTP_201_CREATED, response_model=SuccessResponse)
async def add_category(payload: CategoryRequest, actor: Actor = Depends(get_current_actor)):
    category = await catalog_service.create_category(payload)
    return SuccessResponse(data=CategoryResponse.model_validate(category).model_dump())


@categories_router.put("/{category_id}", response_model=SuccessResponse)
async def edit_category(category_id: int, payload: CategoryRequest, actor: Actor = Depends(get_current_actor)):
    category = await catalog_service.update_category(category_id, payload)
    return SuccessResponse(data=CategoryResponse.model_validate(category).model_dump())


@categories_router.delete("/{category_id}", response_model=SuccessResponse)
async def remove_category(category_id: int, actor: Actor = Depends(get_current_actor)):
    await catalog_service.delete_category(category_id)
    return SuccessResponse(data=MessageResponse(message="Category deleted successfully").model_dump())
