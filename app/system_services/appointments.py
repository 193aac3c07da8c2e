# app/system_services/appointments.py
import logging
from typing import List

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import as_utc
from app.shared.enums import AppointmentStatus, Role
from app.shared.exceptions import Forbidden, NotFound
from app.system_models.appointment_model.appointment_model import Appointment
from app.system_models.appointment_model.appointment_schemas import AppointmentCreate
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_services.profiles import get_by_id, require_profile
from app.users.auth_dependencies import Caller, require_role

logger = logging.getLogger(__name__)


async def create_appointment(db: AsyncSession, caller: Caller, appointment: AppointmentCreate) -> Appointment:
    """Book an appointment. No slot-conflict check is made."""
    require_role(caller, Role.PATIENT, "Only patients can book appointments")
    patient = await require_profile(db, Role.PATIENT, caller.user_id)

    if await get_by_id(db, Doctor, appointment.doctor_id) is None:
        raise NotFound("Doctor not found")

    db_appointment = Appointment(
        patient_id=patient.id,
        doctor_id=appointment.doctor_id,
        appointment_date=as_utc(appointment.appointment_date),
        appointment_type=appointment.appointment_type.value,
        reason=appointment.reason,
        status=AppointmentStatus.SCHEDULED.value,
    )
    db.add(db_appointment)
    await db.commit()
    await db.refresh(db_appointment)

    logger.info(f"✅ Appointment {db_appointment.id} booked with doctor {db_appointment.doctor_id}")
    return db_appointment


async def patient_appointments(db: AsyncSession, patient_id: str) -> List[Appointment]:
    """Newest first."""
    result = await db.execute(
        select(Appointment)
        .where(Appointment.patient_id == patient_id)
        .order_by(Appointment.appointment_date.desc())
    )
    return list(result.scalars().all())


async def doctor_appointments(db: AsyncSession, doctor_id: str) -> List[Appointment]:
    """Chronological."""
    result = await db.execute(
        select(Appointment)
        .where(Appointment.doctor_id == doctor_id)
        .order_by(Appointment.appointment_date.asc())
    )
    return list(result.scalars().all())


async def list_appointments(db: AsyncSession, caller: Caller) -> List[Appointment]:
    if caller.role is Role.PATIENT:
        patient = await require_profile(db, Role.PATIENT, caller.user_id)
        return await patient_appointments(db, patient.id)
    if caller.role is Role.DOCTOR:
        doctor = await require_profile(db, Role.DOCTOR, caller.user_id)
        return await doctor_appointments(db, doctor.id)
    if caller.role is Role.PHARMACY:
        raise Forbidden("Pharmacies have no appointments")
    raise ValueError(f"Unhandled role: {caller.role}")
