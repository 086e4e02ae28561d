from datetime import datetime

from pydantic import BaseModel, ConfigDict


class ActivityLogResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    item_name: str
    action: str
    user_id: str
    user_name: str
    user_role: str
    details: str
    timestamp: datetime
