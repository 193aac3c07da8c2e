# app/system_models/doctor_model/doctor_model.py
from sqlalchemy import Column, Integer, String, DateTime, Text, Numeric, JSON, ForeignKey
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow

class Doctor(Base):
    __tablename__ = "doctors"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)

    license_number = Column(String, nullable=False)
    specialization = Column(String, nullable=False, index=True)
    experience = Column(Integer, default=0)
    education = Column(Text, nullable=True)
    certifications = Column(Text, nullable=True)
    hospital_affiliations = Column(Text, nullable=True)
    consultation_fee = Column(Numeric(10, 2), nullable=True)
    available_slots = Column(JSON, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Doctor {self.id}: {self.specialization}>"
