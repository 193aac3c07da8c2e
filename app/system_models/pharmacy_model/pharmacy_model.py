# app/system_models/pharmacy_model/pharmacy_model.py
from sqlalchemy import Column, String, DateTime, Text, JSON, ForeignKey
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow

class Pharmacy(Base):
    __tablename__ = "pharmacies"

    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String(36), ForeignKey("users.id"), unique=True, nullable=False)

    pharmacy_name = Column(String, nullable=False, index=True)
    license_number = Column(String, nullable=False)
    address = Column(Text, nullable=False)
    phone = Column(String, nullable=False, default="")
    operating_hours = Column(JSON, nullable=True)
    services_offered = Column(Text, nullable=True)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    def __repr__(self):
        return f"<Pharmacy(id={self.id}, name='{self.pharmacy_name}')>"
