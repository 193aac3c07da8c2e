# app/system_services/prescription_lifecycle.py
"""
Prescription Lifecycle
Doctors author prescriptions, pharmacies walk them through

    pending → approved → dispensed → completed

Every status write is a compare-and-set on the current status, so two
pharmacies acting on the same row cannot both succeed.
"""
import logging
from typing import Dict, List, Optional

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import as_utc, utcnow
from app.shared.enums import PrescriptionStatus, Role
from app.shared.exceptions import Forbidden, InvalidTransition, NotFound, ValidationFailed
from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.patient_model.patient_model import Patient
from app.system_models.pharmacy_model.pharmacy_model import Pharmacy
from app.system_models.prescription_model.prescription_model import Prescription
from app.system_models.prescription_model.prescription_schemas import PrescriptionCreate
from app.system_services.profiles import get_by_id, require_profile
from app.users.auth_dependencies import Caller, require_role

logger = logging.getLogger(__name__)

# The only legal edges
TRANSITIONS: Dict[PrescriptionStatus, PrescriptionStatus] = {
    PrescriptionStatus.PENDING: PrescriptionStatus.APPROVED,
    PrescriptionStatus.APPROVED: PrescriptionStatus.DISPENSED,
    PrescriptionStatus.DISPENSED: PrescriptionStatus.COMPLETED,
}

# Statuses surfaced in a pharmacy's actionable queue
ACTIONABLE_STATUSES = (PrescriptionStatus.PENDING, PrescriptionStatus.APPROVED)


def is_legal_transition(current: PrescriptionStatus, target: PrescriptionStatus) -> bool:
    return TRANSITIONS.get(current) is target


# ============================================================
# ✅ CREATE PRESCRIPTION
# ============================================================
async def create_prescription(
    db: AsyncSession, caller: Caller, payload: PrescriptionCreate
) -> Prescription:
    """Create a new prescription. Status is always pending."""
    require_role(caller, Role.DOCTOR, "Only doctors can create prescriptions")
    doctor = await require_profile(db, Role.DOCTOR, caller.user_id)

    if not payload.medications:
        raise ValidationFailed("At least one medication is required")

    if await get_by_id(db, Patient, payload.patient_id) is None:
        raise NotFound("Patient not found")
    if payload.pharmacy_id and await get_by_id(db, Pharmacy, payload.pharmacy_id) is None:
        raise NotFound("Pharmacy not found")
    if payload.appointment_id and await get_by_id(db, Appointment, payload.appointment_id) is None:
        raise NotFound("Appointment not found")

    valid_until = as_utc(payload.valid_until)
    if valid_until is not None and valid_until < utcnow():
        raise ValidationFailed("valid_until must not be in the past")

    prescription = Prescription(
        doctor_id=doctor.id,
        patient_id=payload.patient_id,
        appointment_id=payload.appointment_id,
        pharmacy_id=payload.pharmacy_id,
        medications=[m.model_dump() for m in payload.medications],
        instructions=payload.instructions,
        valid_until=valid_until,
        status=PrescriptionStatus.PENDING.value,
    )
    db.add(prescription)
    await db.commit()
    await db.refresh(prescription)

    logger.info(
        f"✅ Prescription {prescription.id} created by doctor {doctor.id} "
        f"for patient {prescription.patient_id} ({len(prescription.medications)} medications)"
    )
    return prescription


# ============================================================
# ✅ SET STATUS (pharmacy only)
# ============================================================
async def set_prescription_status(
    db: AsyncSession,
    caller: Caller,
    prescription_id: str,
    new_status: PrescriptionStatus,
) -> Prescription:
    require_role(caller, Role.PHARMACY, "Only pharmacies can update prescription status")
    pharmacy = await require_profile(db, Role.PHARMACY, caller.user_id)

    prescription = await db.get(Prescription, prescription_id)
    if prescription is None:
        raise NotFound("Prescription not found")

    # Unassigned prescriptions are open to any pharmacy
    if prescription.pharmacy_id is not None and prescription.pharmacy_id != pharmacy.id:
        raise Forbidden("Prescription is assigned to another pharmacy")

    current = PrescriptionStatus(prescription.status)
    if not is_legal_transition(current, new_status):
        raise InvalidTransition(
            f"Cannot move prescription from '{current.value}' to '{new_status.value}'"
        )

    result = await db.execute(
        update(Prescription)
        .where(
            Prescription.id == prescription_id,
            Prescription.status == current.value,
        )
        .values(status=new_status.value, updated_at=utcnow())
    )
    if result.rowcount != 1:
        await db.rollback()
        logger.warning(f"⚠️  Prescription {prescription_id} changed concurrently; transition rejected")
        raise InvalidTransition("Prescription status changed concurrently; reload and retry")

    await db.commit()
    await db.refresh(prescription)

    logger.info(
        f"✅ Prescription {prescription_id}: {current.value} → {new_status.value} "
        f"by pharmacy {pharmacy.id}"
    )
    return prescription


# ============================================================
# ✅ READS
# ============================================================
async def get_prescription(db: AsyncSession, caller: Caller, prescription_id: str) -> Prescription:
    """Single prescription, visible to its patient, its author and its pharmacy."""
    prescription = await db.get(Prescription, prescription_id)
    if prescription is None:
        raise NotFound("Prescription not found")

    profile = await require_profile(db, caller.role, caller.user_id)
    if caller.role is Role.PATIENT:
        allowed = prescription.patient_id == profile.id
    elif caller.role is Role.DOCTOR:
        allowed = prescription.doctor_id == profile.id
    elif caller.role is Role.PHARMACY:
        allowed = prescription.pharmacy_id in (None, profile.id)
    else:
        raise ValueError(f"Unhandled role: {caller.role}")

    if not allowed:
        raise Forbidden("Access denied")
    return prescription


async def patient_prescriptions(db: AsyncSession, patient_id: str) -> List[Prescription]:
    result = await db.execute(
        select(Prescription)
        .where(Prescription.patient_id == patient_id)
        .order_by(Prescription.created_at.desc())
    )
    return list(result.scalars().all())


async def doctor_prescriptions(db: AsyncSession, doctor_id: str) -> List[Prescription]:
    result = await db.execute(
        select(Prescription)
        .where(Prescription.doctor_id == doctor_id)
        .order_by(Prescription.created_at.desc())
    )
    return list(result.scalars().all())


async def pharmacy_queue(db: AsyncSession, pharmacy_id: str) -> List[Prescription]:
    """Actionable queue: assigned to this pharmacy and still pending or approved."""
    result = await db.execute(
        select(Prescription)
        .where(
            Prescription.pharmacy_id == pharmacy_id,
            Prescription.status.in_([s.value for s in ACTIONABLE_STATUSES]),
        )
        .order_by(Prescription.created_at.desc())
    )
    return list(result.scalars().all())


QUEUE_LOADERS = {
    Role.PATIENT: patient_prescriptions,
    Role.DOCTOR: doctor_prescriptions,
    Role.PHARMACY: pharmacy_queue,
}


async def list_prescriptions_for(
    db: AsyncSession, caller: Caller, owner_id: Optional[str] = None
) -> List[Prescription]:
    """
    Role-scoped listing, newest first.

    Args:
        caller: resolved identity; its role picks the listing
        owner_id: profile id to list for; defaults to the caller's own profile.
            A caller may only list its own profile.
    """
    profile = await require_profile(db, caller.role, caller.user_id)
    if owner_id is not None and owner_id != profile.id:
        raise Forbidden("Cannot list prescriptions of another profile")
    return await QUEUE_LOADERS[caller.role](db, profile.id)
