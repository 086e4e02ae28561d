from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class DamagedItemUpdate(BaseModel):
    """Follow-up on a damage report."""
    status: str = Field(..., min_length=1, max_length=64, description="e.g. Pending, Returned to supplier, Disposed.")
    notes: str = ""


class DamagedItemResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_id: int
    item_name: str
    quantity: int
    status: str
    notes: str
    reported_by: str
    created_at: datetime
    updated_at: datetime
