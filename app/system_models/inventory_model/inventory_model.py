# app/system_models/inventory_model/inventory_model.py
from sqlalchemy import Column, Integer, String, Date, DateTime, Numeric, ForeignKey, CheckConstraint
from app.database.connection import Base
from app.helpers.ids import new_id
from app.helpers.time import utcnow

DEFAULT_MIN_STOCK_LEVEL = 10

class InventoryItem(Base):
    __tablename__ = "inventory"

    id = Column(String(36), primary_key=True, default=new_id)
    pharmacy_id = Column(String(36), ForeignKey("pharmacies.id"), nullable=False, index=True)

    medicine_name = Column(String, nullable=False)
    generic_name = Column(String)
    manufacturer = Column(String)
    dosage = Column(String)
    form = Column(String)  # tablet, capsule, syrup, ...
    current_stock = Column(Integer, nullable=False, default=0)
    min_stock_level = Column(Integer, nullable=False, default=DEFAULT_MIN_STOCK_LEVEL)
    price = Column(Numeric(10, 2))
    expiry_date = Column(Date)
    batch_number = Column(String)

    created_at = Column(DateTime(timezone=True), default=utcnow)
    updated_at = Column(DateTime(timezone=True), default=utcnow, onupdate=utcnow)

    __table_args__ = (
        CheckConstraint("current_stock >= 0", name="check_current_stock_non_negative"),
        CheckConstraint("min_stock_level >= 0", name="check_min_stock_non_negative"),
    )

    def __repr__(self):
        return f"<InventoryItem {self.medicine_name}: {self.current_stock}/{self.min_stock_level}>"
