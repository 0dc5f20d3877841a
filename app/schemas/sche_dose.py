from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict

from app.helpers.enums import DoseStatus


class DoseResponse(BaseModel):
    dose_id: str
    medication_id: str
    user_id: str
    scheduled_time: datetime
    status: str
    medication_name: Optional[str] = None

    model_config = ConfigDict(from_attributes=True)


class DoseStatusUpdateRequest(BaseModel):
    status: DoseStatus
