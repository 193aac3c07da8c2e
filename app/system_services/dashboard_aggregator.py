# app/system_services/dashboard_aggregator.py
"""
Dashboard Aggregator
Read-only projections per role. Each builder fetches the owning collections
once and derives every figure by filtering and slicing them in memory.
"""
import logging
from typing import Awaitable, Callable, Dict, Union

from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import as_utc, day_bounds, today, utcnow
from app.shared.enums import AppointmentStatus, PrescriptionStatus, Role
from app.system_services import appointments as appointment_service
from app.system_services import inventory_ledger
from app.system_services import prescription_lifecycle
from app.system_services.dashboard_schemas import (
    DoctorDashboard,
    PatientDashboard,
    PharmacyDashboard,
)
from app.system_services.profiles import require_profile
from app.users.auth_dependencies import Caller

logger = logging.getLogger(__name__)

# Fixed slice sizes, not pagination
PATIENT_RECENT_APPOINTMENTS = 5
PATIENT_RECENT_PRESCRIPTIONS = 3
DOCTOR_APPOINTMENTS = 10
DOCTOR_RECENT_PRESCRIPTIONS = 5
PHARMACY_QUEUE_SLICE = 5
PHARMACY_INVENTORY_SLICE = 10
PHARMACY_ALERT_SLICE = 5
EXPIRY_HORIZON_DAYS = inventory_ledger.DEFAULT_EXPIRY_HORIZON_DAYS

# Shown when the patient profile carries no score yet
DEFAULT_HEALTH_SCORE = 85

UPCOMING_STATUSES = {AppointmentStatus.SCHEDULED.value, AppointmentStatus.CONFIRMED.value}


async def patient_dashboard(db: AsyncSession, caller: Caller) -> PatientDashboard:
    patient = await require_profile(db, Role.PATIENT, caller.user_id)
    appointments = await appointment_service.patient_appointments(db, patient.id)
    prescriptions = await prescription_lifecycle.patient_prescriptions(db, patient.id)

    now = utcnow()
    upcoming = [
        a for a in appointments
        if a.status in UPCOMING_STATUSES and as_utc(a.appointment_date) >= now
    ]
    next_appointment = min(upcoming, key=lambda a: as_utc(a.appointment_date), default=None)

    return PatientDashboard.model_validate(dict(
        patient=patient,
        appointments=appointments[:PATIENT_RECENT_APPOINTMENTS],
        prescriptions=prescriptions[:PATIENT_RECENT_PRESCRIPTIONS],
        stats=dict(
            next_appointment=next_appointment,
            active_prescriptions=sum(
                1 for p in prescriptions if p.status == PrescriptionStatus.APPROVED.value
            ),
            health_score=patient.health_score or DEFAULT_HEALTH_SCORE,
        ),
    ), from_attributes=True)


async def doctor_dashboard(db: AsyncSession, caller: Caller) -> DoctorDashboard:
    doctor = await require_profile(db, Role.DOCTOR, caller.user_id)
    appointments = await appointment_service.doctor_appointments(db, doctor.id)
    prescriptions = await prescription_lifecycle.doctor_prescriptions(db, doctor.id)

    day_start, day_end = day_bounds(today())
    today_appointments = [
        a for a in appointments if day_start <= as_utc(a.appointment_date) < day_end
    ]

    return DoctorDashboard.model_validate(dict(
        doctor=doctor,
        today_appointments=today_appointments,
        appointments=appointments[:DOCTOR_APPOINTMENTS],
        prescriptions=prescriptions[:DOCTOR_RECENT_PRESCRIPTIONS],
        stats=dict(
            today_patients=len(today_appointments),
            pending_reviews=sum(
                1 for a in appointments
                if a.status == AppointmentStatus.COMPLETED.value and not a.diagnosis
            ),
            total_prescriptions=len(prescriptions),
        ),
    ), from_attributes=True)


async def pharmacy_dashboard(db: AsyncSession, caller: Caller) -> PharmacyDashboard:
    pharmacy = await require_profile(db, Role.PHARMACY, caller.user_id)
    queue = await prescription_lifecycle.pharmacy_queue(db, pharmacy.id)
    inventory = await inventory_ledger.list_inventory(db, pharmacy.id)
    low_stock = await inventory_ledger.low_stock_items(db, pharmacy.id)
    expiring = await inventory_ledger.expiring_items(db, pharmacy.id, EXPIRY_HORIZON_DAYS)

    pending = [p for p in queue if p.status == PrescriptionStatus.PENDING.value]
    approved = [p for p in queue if p.status == PrescriptionStatus.APPROVED.value]

    return PharmacyDashboard.model_validate(dict(
        pharmacy=pharmacy,
        new_prescriptions=pending[:PHARMACY_QUEUE_SLICE],
        approved_prescriptions=approved[:PHARMACY_QUEUE_SLICE],
        inventory=inventory[:PHARMACY_INVENTORY_SLICE],
        low_stock_items=low_stock[:PHARMACY_ALERT_SLICE],
        expiring_items=expiring[:PHARMACY_ALERT_SLICE],
        stats=dict(
            pending_orders=len(pending),
            approved_orders=len(approved),
            low_stock_count=len(low_stock),
            expiring_count=len(expiring),
        ),
    ), from_attributes=True)


DashboardBuilder = Callable[
    [AsyncSession, Caller],
    Awaitable[Union[PatientDashboard, DoctorDashboard, PharmacyDashboard]],
]

DASHBOARD_BUILDERS: Dict[Role, DashboardBuilder] = {
    Role.PATIENT: patient_dashboard,
    Role.DOCTOR: doctor_dashboard,
    Role.PHARMACY: pharmacy_dashboard,
}
