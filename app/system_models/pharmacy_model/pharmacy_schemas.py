# app/system_models/pharmacy_model/pharmacy_schemas.py
from typing import Any, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class PharmacyResponse(BaseModel):
    id: str
    user_id: str
    pharmacy_name: str
    license_number: str
    address: str
    phone: str
    operating_hours: Optional[Any] = None
    services_offered: Optional[str] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
