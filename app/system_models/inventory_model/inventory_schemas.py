# app/system_models/inventory_model/inventory_schemas.py
from typing import Optional
from decimal import Decimal
from datetime import date, datetime
from pydantic import BaseModel, ConfigDict, Field

from app.system_models.inventory_model.inventory_model import DEFAULT_MIN_STOCK_LEVEL

class InventoryItemBase(BaseModel):
    medicine_name: str = Field(..., min_length=1)
    generic_name: Optional[str] = None
    manufacturer: Optional[str] = None
    dosage: Optional[str] = None
    form: Optional[str] = None
    current_stock: int = 0
    min_stock_level: int = DEFAULT_MIN_STOCK_LEVEL
    price: Optional[Decimal] = Field(None, ge=0)
    expiry_date: Optional[date] = None
    batch_number: Optional[str] = None

# Non-negative stock is checked in inventory_ledger
class InventoryItemUpsert(InventoryItemBase):
    pass

class InventoryItemResponse(InventoryItemBase):
    id: str
    pharmacy_id: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)
