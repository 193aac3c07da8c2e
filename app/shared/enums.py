# app/shared/enums.py
"""
Closed vocabularies shared by models, schemas and services.
Role-dependent lookups are keyed by these enums, never by raw strings.
"""
import enum


class Role(str, enum.Enum):
    PATIENT = "patient"
    DOCTOR = "doctor"
    PHARMACY = "pharmacy"


class PrescriptionStatus(str, enum.Enum):
    PENDING = "pending"
    APPROVED = "approved"
    DISPENSED = "dispensed"
    COMPLETED = "completed"


class AppointmentStatus(str, enum.Enum):
    SCHEDULED = "scheduled"
    CONFIRMED = "confirmed"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class AppointmentType(str, enum.Enum):
    VIDEO = "video"
    IN_PERSON = "in-person"


class MessageRole(str, enum.Enum):
    USER = "user"
    ASSISTANT = "assistant"


def sql_values(enum_cls) -> str:
    """Comma separated quoted values for CHECK constraints."""
    return ", ".join(f"'{member.value}'" for member in enum_cls)
