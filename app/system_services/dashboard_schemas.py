# app/system_services/dashboard_schemas.py
from typing import List, Optional

from pydantic import BaseModel

from app.system_models.appointment_model.appointment_schemas import AppointmentResponse
from app.system_models.doctor_model.doctor_schemas import DoctorResponse
from app.system_models.inventory_model.inventory_schemas import InventoryItemResponse
from app.system_models.patient_model.patient_schemas import PatientResponse
from app.system_models.pharmacy_model.pharmacy_schemas import PharmacyResponse
from app.system_models.prescription_model.prescription_schemas import PrescriptionResponse


class PatientStats(BaseModel):
    next_appointment: Optional[AppointmentResponse] = None
    active_prescriptions: int
    health_score: int


class PatientDashboard(BaseModel):
    patient: PatientResponse
    appointments: List[AppointmentResponse]
    prescriptions: List[PrescriptionResponse]
    stats: PatientStats


class DoctorStats(BaseModel):
    today_patients: int
    pending_reviews: int
    total_prescriptions: int


class DoctorDashboard(BaseModel):
    doctor: DoctorResponse
    today_appointments: List[AppointmentResponse]
    appointments: List[AppointmentResponse]
    prescriptions: List[PrescriptionResponse]
    stats: DoctorStats


class PharmacyStats(BaseModel):
    pending_orders: int
    approved_orders: int
    low_stock_count: int
    expiring_count: int


class PharmacyDashboard(BaseModel):
    pharmacy: PharmacyResponse
    new_prescriptions: List[PrescriptionResponse]
    approved_prescriptions: List[PrescriptionResponse]
    inventory: List[InventoryItemResponse]
    low_stock_items: List[InventoryItemResponse]
    expiring_items: List[InventoryItemResponse]
    stats: PharmacyStats
