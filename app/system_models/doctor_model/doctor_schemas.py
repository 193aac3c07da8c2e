# app/system_models/doctor_model/doctor_schemas.py
from typing import Any, Optional
from decimal import Decimal
from datetime import datetime
from pydantic import BaseModel, ConfigDict

class DoctorResponse(BaseModel):
    id: str
    user_id: str
    license_number: str
    specialization: str
    experience: Optional[int] = None
    education: Optional[str] = None
    certifications: Optional[str] = None
    hospital_affiliations: Optional[str] = None
    consultation_fee: Optional[Decimal] = None
    available_slots: Optional[Any] = None
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)
