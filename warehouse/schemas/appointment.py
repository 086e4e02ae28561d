import re
from datetime import date as date_type, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from warehouse.models.appointment import AppointmentStatus

_SLOT_TIME = re.compile(r"([01]\d|2[0-3]):[0-5]\d(:[0-5]\d)?")


def check_slot_time(value: str) -> str:
    """Accepts zero-padded 24h "HH:MM" or "HH:MM:SS" and returns it unchanged."""
    if not _SLOT_TIME.fullmatch(value):
        raise ValueError("Time must be HH:MM or HH:MM:SS (24-hour clock).")
    return value


class LineItem(BaseModel):
    """One (inventory item, quantity) pair within an appointment."""
    item_id: int
    item_name: str
    quantity: int = Field(..., gt=0, description="Units to restock.")


class AppointmentCreate(BaseModel):
    """Schema for scheduling a restock appointment."""
    supplier_id: int
    supplier_name: str = Field(..., min_length=1)
    date: date_type
    time: str = Field(..., description="Slot time, e.g. 09:30.")
    status: AppointmentStatus = AppointmentStatus.PENDING
    items: List[LineItem] = Field(..., min_length=1)
    notes: str = ""

    @field_validator("time")
    @classmethod
    def time_format(cls, v):
        return check_slot_time(v)


class AppointmentUpdate(BaseModel):
    """Partial update; only fields present in the request are rewritten."""
    supplier_id: Optional[int] = None
    supplier_name: Optional[str] = None
    date: Optional[date_type] = None
    time: Optional[str] = None
    status: Optional[AppointmentStatus] = None
    items: Optional[List[LineItem]] = None
    notes: Optional[str] = None

    @field_validator("time")
    @classmethod
    def time_format(cls, v):
        return v if v is None else check_slot_time(v)

    @field_validator("items")
    @classmethod
    def items_not_empty(cls, v):
        if v is not None and len(v) == 0:
            raise ValueError("An appointment must keep at least one line item.")
        return v


class AppointmentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    supplier_id: int
    supplier_name: str
    date: date_type
    time: str
    status: AppointmentStatus
    items: List[LineItem]
    notes: str
    scheduled_by: str
    created_at: datetime
    updated_at: datetime


class CompletionSummary(BaseModel):
    """Result of completing an appointment. Serialized with camelCase keys."""
    model_config = ConfigDict(populate_by_name=True)

    message: str
    items_restocked: int = Field(..., serialization_alias="itemsRestocked")
    total_units: int = Field(..., serialization_alias="totalUnits")
