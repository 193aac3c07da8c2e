# app/system_services/system_routes.py
from typing import List, Union

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.system_models.appointment_model.appointment_schemas import AppointmentCreate, AppointmentResponse
from app.system_models.doctor_model.doctor_schemas import DoctorResponse
from app.system_models.inventory_model.inventory_schemas import InventoryItemResponse, InventoryItemUpsert
from app.system_models.pharmacy_model.pharmacy_schemas import PharmacyResponse
from app.system_models.prescription_model.prescription_schemas import (
    PrescriptionCreate,
    PrescriptionResponse,
    PrescriptionStatusUpdate,
)
from app.system_services import appointments as appointment_service
from app.system_services import inventory_ledger
from app.system_services import prescription_lifecycle
from app.system_services import profiles
from app.shared.enums import Role
from app.system_services.dashboard_aggregator import (
    DASHBOARD_BUILDERS,
    doctor_dashboard,
    patient_dashboard,
    pharmacy_dashboard,
)
from app.system_services.dashboard_schemas import DoctorDashboard, PatientDashboard, PharmacyDashboard
from app.users.auth_dependencies import Caller, get_caller, require_role

router = APIRouter()

# ============================================================
# ✅ PRESCRIPTIONS
# ============================================================
@router.post("/prescriptions", response_model=PrescriptionResponse, tags=["Prescriptions"])
async def create_prescription_endpoint(
    prescription: PrescriptionCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Create a new prescription (doctors only). Always starts as pending."""
    return await prescription_lifecycle.create_prescription(db, caller, prescription)


@router.get("/prescriptions", response_model=List[PrescriptionResponse], tags=["Prescriptions"])
async def list_prescriptions_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """
    Role-scoped prescriptions, newest first.
    Patients see their own, doctors see what they authored, pharmacies see
    their pending/approved queue.
    """
    return await prescription_lifecycle.list_prescriptions_for(db, caller)


@router.get("/prescriptions/{prescription_id}", response_model=PrescriptionResponse, tags=["Prescriptions"])
async def get_prescription_endpoint(
    prescription_id: str,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return await prescription_lifecycle.get_prescription(db, caller, prescription_id)


@router.put("/prescriptions/{prescription_id}/status", response_model=PrescriptionResponse, tags=["Prescriptions"])
async def update_prescription_status_endpoint(
    prescription_id: str,
    payload: PrescriptionStatusUpdate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Advance a prescription one step (pharmacies only)."""
    return await prescription_lifecycle.set_prescription_status(
        db, caller, prescription_id, payload.status
    )


# ============================================================
# ✅ INVENTORY
# ============================================================
@router.get("/inventory", response_model=List[InventoryItemResponse], tags=["Inventory"])
async def list_inventory_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    owner_id = await inventory_ledger.resolve_owner(db, caller)
    return await inventory_ledger.list_inventory(db, owner_id)


@router.post("/inventory", response_model=InventoryItemResponse, tags=["Inventory"])
async def create_inventory_item_endpoint(
    item: InventoryItemUpsert,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return await inventory_ledger.upsert_inventory_item(db, caller, item)


@router.put("/inventory/{item_id}", response_model=InventoryItemResponse, tags=["Inventory"])
async def replace_inventory_item_endpoint(
    item_id: str,
    item: InventoryItemUpsert,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return await inventory_ledger.upsert_inventory_item(db, caller, item, item_id=item_id)


@router.get("/inventory/low-stock", response_model=List[InventoryItemResponse], tags=["Inventory"])
async def low_stock_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Items strictly below their minimum stock level, most depleted first."""
    owner_id = await inventory_ledger.resolve_owner(db, caller)
    return await inventory_ledger.low_stock_items(db, owner_id)


@router.get("/inventory/expiring", response_model=List[InventoryItemResponse], tags=["Inventory"])
async def expiring_endpoint(
    days: int = Query(inventory_ledger.DEFAULT_EXPIRY_HORIZON_DAYS, ge=0, le=3650),
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """
    Items expiring before today + days, soonest first.

    Example: GET /api/inventory/expiring?days=30
    """
    owner_id = await inventory_ledger.resolve_owner(db, caller)
    return await inventory_ledger.expiring_items(db, owner_id, days)


# ============================================================
# ✅ APPOINTMENTS
# ============================================================
@router.post("/appointments", response_model=AppointmentResponse, tags=["Appointments"])
async def create_appointment_endpoint(
    appointment: AppointmentCreate,
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Book an appointment (patients only)."""
    return await appointment_service.create_appointment(db, caller, appointment)


@router.get("/appointments", response_model=List[AppointmentResponse], tags=["Appointments"])
async def list_appointments_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return await appointment_service.list_appointments(db, caller)


# ============================================================
# ✅ DIRECTORY
# ============================================================
@router.get("/doctors", response_model=List[DoctorResponse], tags=["Directory"])
async def list_doctors_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return await profiles.list_doctors(db)


@router.get("/pharmacies", response_model=List[PharmacyResponse], tags=["Directory"])
async def list_pharmacies_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    return await profiles.list_pharmacies(db)


# ============================================================
# ✅ DASHBOARD
# ============================================================
@router.get(
    "/dashboard",
    response_model=Union[PatientDashboard, DoctorDashboard, PharmacyDashboard],
    tags=["Dashboard"],
)
async def dashboard_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    """Summary for the caller's role."""
    return await DASHBOARD_BUILDERS[caller.role](db, caller)


@router.get("/patient/dashboard", response_model=PatientDashboard, tags=["Dashboard"])
async def patient_dashboard_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    require_role(caller, Role.PATIENT)
    return await patient_dashboard(db, caller)


@router.get("/doctor/dashboard", response_model=DoctorDashboard, tags=["Dashboard"])
async def doctor_dashboard_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    require_role(caller, Role.DOCTOR)
    return await doctor_dashboard(db, caller)


@router.get("/pharmacy/dashboard", response_model=PharmacyDashboard, tags=["Dashboard"])
async def pharmacy_dashboard_endpoint(
    db: AsyncSession = Depends(get_db),
    caller: Caller = Depends(get_caller),
):
    require_role(caller, Role.PHARMACY)
    return await pharmacy_dashboard(db, caller)
