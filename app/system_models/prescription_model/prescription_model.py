# app/system_models/prescription_model/prescription_model.py
from sqlalchemy import Column, String, DateTime, Text, JSON, ForeignKey, CheckConstraint
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow
from app.shared.enums import PrescriptionStatus, sql_values

class Prescription(Base):
    __tablename__ = "prescriptions"

    id = Column(String(36), primary_key=True, default=new_id)
    appointment_id = Column(String(36), ForeignKey("appointments.id"), nullable=True)
    patient_id = Column(String(36), ForeignKey("patients.id"), nullable=False, index=True)
    doctor_id = Column(String(36), ForeignKey("doctors.id"), nullable=False, index=True)
    pharmacy_id = Column(String(36), ForeignKey("pharmacies.id"), nullable=True, index=True)

    # Ordered list of {name, dosage, frequency, instructions}
    medications = Column(JSON, nullable=False)
    instructions = Column(Text)
    status = Column(String, nullable=False, default=PrescriptionStatus.PENDING.value)
    valid_until = Column(DateTime(timezone=True), nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint(f"status IN ({sql_values(PrescriptionStatus)})", name="check_prescription_status"),
    )

    def __repr__(self):
        return f"<Prescription {self.id}: {self.status}>"
