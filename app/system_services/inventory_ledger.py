# app/system_services/inventory_ledger.py
"""
Inventory Ledger
Per-pharmacy stock records and the threshold queries a pharmacy relies on:
low stock (current below reorder level) and near expiry.
"""
import logging
from datetime import timedelta
from typing import List, Optional

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.time import today, utcnow
from app.shared.enums import Role
from app.shared.exceptions import Forbidden, NotFound, ValidationFailed
from app.system_models.inventory_model.inventory_model import InventoryItem
from app.system_models.inventory_model.inventory_schemas import InventoryItemUpsert
from app.system_services.profiles import require_profile
from app.users.auth_dependencies import Caller, require_role

logger = logging.getLogger(__name__)

DEFAULT_EXPIRY_HORIZON_DAYS = 30


async def resolve_owner(db: AsyncSession, caller: Caller) -> str:
    """Pharmacy profile id of the caller."""
    require_role(caller, Role.PHARMACY, "Only pharmacies can manage inventory")
    pharmacy = await require_profile(db, Role.PHARMACY, caller.user_id)
    return pharmacy.id


def _validate_stock(item: InventoryItemUpsert) -> None:
    if item.current_stock < 0:
        raise ValidationFailed("current_stock must be non-negative")
    if item.min_stock_level < 0:
        raise ValidationFailed("min_stock_level must be non-negative")


# ============================================================
# ✅ UPSERT ITEM
# ============================================================
async def upsert_inventory_item(
    db: AsyncSession,
    caller: Caller,
    item: InventoryItemUpsert,
    item_id: Optional[str] = None,
) -> InventoryItem:
    """
    Create a stock record, or replace an existing one when item_id is given.
    The record always belongs to the caller's pharmacy.
    """
    owner_id = await resolve_owner(db, caller)
    _validate_stock(item)

    if item_id is None:
        record = InventoryItem(pharmacy_id=owner_id, **item.model_dump())
        db.add(record)
        action = "created"
    else:
        record = await db.get(InventoryItem, item_id)
        if record is None:
            raise NotFound("Inventory item not found")
        if record.pharmacy_id != owner_id:
            raise Forbidden("Inventory item belongs to another pharmacy")
        for field, value in item.model_dump().items():
            setattr(record, field, value)
        record.updated_at = utcnow()
        action = "replaced"

    await db.commit()
    await db.refresh(record)

    logger.info(
        f"✅ Inventory item {record.id} {action} for pharmacy {owner_id}: "
        f"{record.medicine_name} stock={record.current_stock}/{record.min_stock_level}"
    )
    return record


# ============================================================
# ✅ READS
# ============================================================
async def list_inventory(db: AsyncSession, owner_id: str) -> List[InventoryItem]:
    result = await db.execute(
        select(InventoryItem)
        .where(InventoryItem.pharmacy_id == owner_id)
        .order_by(InventoryItem.medicine_name.asc())
    )
    return list(result.scalars().all())


async def low_stock_items(db: AsyncSession, owner_id: str) -> List[InventoryItem]:
    """Items strictly below their reorder level, most depleted first."""
    result = await db.execute(
        select(InventoryItem)
        .where(
            InventoryItem.pharmacy_id == owner_id,
            InventoryItem.current_stock < InventoryItem.min_stock_level,
        )
        .order_by(InventoryItem.current_stock.asc(), InventoryItem.medicine_name.asc())
    )
    return list(result.scalars().all())


async def expiring_items(db: AsyncSession, owner_id: str, days: int) -> List[InventoryItem]:
    """Items whose expiry date falls strictly before today + days, soonest first."""
    if days < 0:
        raise ValidationFailed("days must be non-negative")
    cutoff = today() + timedelta(days=days)
    result = await db.execute(
        select(InventoryItem)
        .where(
            InventoryItem.pharmacy_id == owner_id,
            InventoryItem.expiry_date.is_not(None),
            InventoryItem.expiry_date < cutoff,
        )
        .order_by(InventoryItem.expiry_date.asc(), InventoryItem.medicine_name.asc())
    )
    return list(result.scalars().all())
