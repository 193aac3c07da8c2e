# app/system_models/appointment_model/appointment_model.py
from sqlalchemy import Column, String, DateTime, Text, ForeignKey, CheckConstraint
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow
from app.shared.enums import AppointmentStatus, AppointmentType, sql_values

class Appointment(Base):
    __tablename__ = "appointments"

    id = Column(String(36), primary_key=True, default=new_id)
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    appointment_date = Column(DateTime(timezone=True), nullable=False)
    appointment_type = Column(String, nullable=False)
    status = Column(String, nullable=False, default=AppointmentStatus.SCHEDULED.value)
    reason = Column(Text)
    notes = Column(Text)
    diagnosis = Column(Text)
    treatment_plan = Column(Text)
    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(f"status IN ({sql_values(AppointmentStatus)})", name="check_appointment_status"),
        CheckConstraint(f"appointment_type IN ({sql_values(AppointmentType)})", name="check_appointment_type"),
    )
