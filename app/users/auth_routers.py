# app/users/auth_routers.py

from fastapi import APIRouter, Body, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.shared.enums import Role
from app.system_models.doctor_model.doctor_schemas import DoctorResponse
from app.system_models.patient_model.patient_schemas import PatientResponse
from app.system_models.pharmacy_model.pharmacy_schemas import PharmacyResponse
from app.users.auth_dependencies import get_current_user
from app.users.auth_services import (
    registering_user,
    login_user,
    refresh_access_token,
    logout_user,
    load_user_profile,
)
from app.users.user_models.schemas import (
    CurrentUserResponse,
    UserRegister,
    UserLogin,
    UserResponse,
    UserRegisterResponse,
    UserLoginResponse,
    UserLogoutResponse,
    UserRefreshResponse,
)
from app.users.user_models.user_model import User

router = APIRouter()

PROFILE_SCHEMAS = {
    Role.PATIENT: PatientResponse,
    Role.DOCTOR: DoctorResponse,
    Role.PHARMACY: PharmacyResponse,
}

# ============================================================
# ✅ REGISTER
# ============================================================
@router.post("/register", response_model=UserRegisterResponse)
async def register_user(user_data: UserRegister, db: AsyncSession = Depends(get_db)) -> UserRegisterResponse:
    user = await registering_user(user_data, db)
    return UserRegisterResponse(user=UserResponse.model_validate(user))


# ============================================================
# ✅ AUTHENTICATE USER (LOGIN)
# ============================================================
@router.post("/login", response_model=UserLoginResponse)
async def login(user_data: UserLogin, db: AsyncSession = Depends(get_db)) -> UserLoginResponse:
    access_token, refresh_token, user = await login_user(user_data, db)
    return UserLoginResponse(
        access_token=access_token,
        refresh_token=refresh_token,
        token_type="bearer",
        user=UserResponse.model_validate(user)
    )


# ============================================================
# ✅ REFRESH TOKEN
# ============================================================
@router.post("/refresh", response_model=UserRefreshResponse)
async def refresh_token(
    refresh_token: str = Body(..., embed=True),
    db: AsyncSession = Depends(get_db)
) -> UserRefreshResponse:
    access_token, new_refresh_token = await refresh_access_token(refresh_token, db)
    return UserRefreshResponse(
        access_token=access_token,
        refresh_token=new_refresh_token,
        token_type="bearer"
    )


# ============================================================
# ✅ LOGOUT USER
# ============================================================
@router.post("/logout", response_model=UserLogoutResponse)
async def logout(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> UserLogoutResponse:
    await logout_user(current_user, db)
    return UserLogoutResponse(message="Logged out successfully")


# ============================================================
# ✅ CURRENT USER
# ============================================================
@router.get("/user", response_model=CurrentUserResponse)
async def current_user(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_db)
) -> CurrentUserResponse:
    profile = await load_user_profile(current_user, db)
    schema = PROFILE_SCHEMAS[Role(current_user.role)]
    return CurrentUserResponse(
        user=UserResponse.model_validate(current_user),
        profile=schema.model_validate(profile) if profile else None,
    )
