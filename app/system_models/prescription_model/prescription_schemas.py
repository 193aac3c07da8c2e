# app/system_models/prescription_model/prescription_schemas.py
from typing import List, Optional
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, field_validator

from app.shared.enums import PrescriptionStatus

class MedicationEntry(BaseModel):
    name: str = Field(..., min_length=1)
    dosage: str = Field(..., min_length=1)
    frequency: str = Field(..., min_length=1)
    instructions: Optional[str] = None

    @field_validator("name", "dosage", "frequency")
    def not_blank(cls, v):
        if not v.strip():
            raise ValueError("must not be blank")
        return v.strip()

class PrescriptionCreate(BaseModel):
    # Any caller-supplied status is ignored; new prescriptions are always pending
    patient_id: str
    medications: List[MedicationEntry] = Field(..., min_length=1)
    instructions: Optional[str] = None
    pharmacy_id: Optional[str] = None
    appointment_id: Optional[str] = None
    valid_until: Optional[datetime] = None

class PrescriptionStatusUpdate(BaseModel):
    status: PrescriptionStatus

class PrescriptionResponse(BaseModel):
    id: str
    appointment_id: Optional[str] = None
    patient_id: str
    doctor_id: str
    pharmacy_id: Optional[str] = None
    medications: List[MedicationEntry]
    instructions: Optional[str] = None
    status: PrescriptionStatus
    valid_until: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
