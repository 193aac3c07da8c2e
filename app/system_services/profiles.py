# app/system_services/profiles.py
"""
Role profile lookups.
Every core operation resolves the caller's user id to its patient, doctor or
pharmacy row before touching foreign keys.
"""
from typing import Dict, List, Optional, Type, TypeVar, Union

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.shared.enums import Role
from app.shared.exceptions import NotFound, ValidationFailed
from app.system_models.doctor_model.doctor_model import Doctor
from app.system_models.patient_model.patient_model import Patient
from app.system_models.pharmacy_model.pharmacy_model import Pharmacy
from app.users.user_models.schemas import UserRegister

Profile = Union[Patient, Doctor, Pharmacy]

ModelT = TypeVar("ModelT")

PROFILE_MODELS: Dict[Role, Type[Profile]] = {
    Role.PATIENT: Patient,
    Role.DOCTOR: Doctor,
    Role.PHARMACY: Pharmacy,
}

PROFILE_LABELS: Dict[Role, str] = {
    Role.PATIENT: "Patient",
    Role.DOCTOR: "Doctor",
    Role.PHARMACY: "Pharmacy",
}


async def find_profile(db: AsyncSession, role: Role, user_id: str) -> Optional[Profile]:
    model = PROFILE_MODELS[role]
    result = await db.execute(select(model).where(model.user_id == user_id))
    return result.scalars().first()


async def require_profile(db: AsyncSession, role: Role, user_id: str) -> Profile:
    """Profile of the given role for this user, or NotFound."""
    profile = await find_profile(db, role, user_id)
    if profile is None:
        raise NotFound(f"{PROFILE_LABELS[role]} profile not found")
    return profile


async def get_by_id(db: AsyncSession, model: Type[ModelT], record_id: str) -> Optional[ModelT]:
    """Row of any model by primary key."""
    return await db.get(model, record_id)


def build_profile(user_id: str, data: UserRegister) -> Profile:
    """
    Role profile for a new user.
    Raises ValidationFailed when the role's required fields are missing.
    """
    if data.role is Role.PATIENT:
        return Patient(
            user_id=user_id,
            date_of_birth=data.date_of_birth,
            gender=data.gender,
            phone=data.phone,
        )
    if data.role is Role.DOCTOR:
        if not data.license_number or not data.specialization:
            raise ValidationFailed("License number and specialization required for doctors")
        return Doctor(
            user_id=user_id,
            license_number=data.license_number,
            specialization=data.specialization,
            experience=data.experience or 0,
        )
    if data.role is Role.PHARMACY:
        if not data.pharmacy_name or not data.license_number or not data.address:
            raise ValidationFailed("Pharmacy name, license number, and address required for pharmacies")
        return Pharmacy(
            user_id=user_id,
            pharmacy_name=data.pharmacy_name,
            license_number=data.license_number,
            address=data.address,
            phone=data.phone or "",
            operating_hours=data.operating_hours,
        )
    raise ValueError(f"Unhandled role: {data.role}")


async def list_doctors(db: AsyncSession) -> List[Doctor]:
    result = await db.execute(select(Doctor).order_by(Doctor.specialization.asc()))
    return list(result.scalars().all())


async def list_pharmacies(db: AsyncSession) -> List[Pharmacy]:
    result = await db.execute(select(Pharmacy).order_by(Pharmacy.pharmacy_name.asc()))
    return list(result.scalars().all())
