from datetime import datetime
from decimal import Decimal
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from warehouse.models.inventory import DamagedStatus
from warehouse.models.ledger import TransactionDirection


class InventoryItemCreate(BaseModel):
    name: str = Field(..., min_length=1, description="Name of the stock-keeping unit (e.g., A4 Bond Paper).")
    category: str = ""
    quantity: int = Field(0, ge=0, description="Initial on-hand quantity.")
    reorder_level: int = Field(10, ge=0, description="Stock level at or below which the item is flagged low.")
    unit_price: Decimal = Field(Decimal("0"), ge=0)
    location: str = ""
    damaged_status: DamagedStatus = DamagedStatus.GOOD
    supplier_id: Optional[int] = None


class InventoryItemUpdate(BaseModel):
    name: Optional[str] = None
    category: Optional[str] = None
    quantity: Optional[int] = Field(None, ge=0, description="Absolute quantity; the difference is recorded in the ledger.")
    reorder_level: Optional[int] = Field(None, ge=0)
    unit_price: Optional[Decimal] = Field(None, ge=0)
    location: Optional[str] = None
    damaged_status: Optional[DamagedStatus] = None
    supplier_id: Optional[int] = None


class InventoryItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    category: str
    quantity: int
    reorder_level: int
    unit_price: Decimal
    location: str
    damaged_status: DamagedStatus
    supplier_id: Optional[int]
    is_low_stock: bool
    updated_at: datetime


class StockMovementRequest(BaseModel):
    """Manual stock IN/OUT recorded outside of an appointment."""
    item_id: int
    direction: TransactionDirection
    quantity: int = Field(..., gt=0)
    reason: str = ""


class StockTransactionResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int
    item_name: str
    direction: TransactionDirection
    quantity: int
    reason: str
    user_id: str
    user_name: str
    user_role: str
    stock_before: int
    stock_after: int
    appointment_id: Optional[int]
    timestamp: datetime


class LedgerReport(BaseModel):
    """Outcome of replaying an item's ledger against its current quantity."""
    item_id: int
    consistent: bool
    quantity: int
    replayed_quantity: int
    transactions: int
    problems: List[str] = []


class SupplierRequest(BaseModel):
    name: str = Field(..., min_length=1)
    contact_person: str = ""
    contact_email: str = ""
    contact_phone: str = ""
    address: str = ""
    is_active: bool = True


class SupplierResponse(SupplierRequest):
    model_config = ConfigDict(from_attributes=True)

    id: int


class CategoryRequest(BaseModel):
    name: str = Field(..., min_length=1)
    description: str = ""


class CategoryResponse(CategoryRequest):
    model_config = ConfigDict(from_attributes=True)

    id: int
