# app/system_models/appointment_model/appointment_schemas.py
from typing import Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict

from app.shared.enums import AppointmentStatus, AppointmentType

class AppointmentCreate(BaseModel):
    doctor_id: str
    appointment_date: datetime
    appointment_type: AppointmentType
    reason: Optional[str] = None

class AppointmentResponse(BaseModel):
    id: str
    patient_id: str
    doctor_id: str
    appointment_date: datetime
    appointment_type: AppointmentType
    status: AppointmentStatus
    reason: Optional[str] = None
    notes: Optional[str] = None
    diagnosis: Optional[str] = None
    treatment_plan: Optional[str] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
