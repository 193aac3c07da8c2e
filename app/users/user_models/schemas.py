# app/users/user_models/schemas.py


from datetime import date, datetime
from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

from app.shared.enums import Role
from app.system_models.doctor_model.doctor_schemas import DoctorResponse
from app.system_models.patient_model.patient_schemas import PatientResponse
from app.system_models.pharmacy_model.pharmacy_schemas import PharmacyResponse


# ✅ Request schema for registration
class UserRegister(BaseModel):
    email: EmailStr
    password: str = Field(..., min_length=8, max_length=100)
    first_name: str = Field(..., min_length=1)
    last_name: str = Field(..., min_length=1)
    role: Role

    # Patient-specific fields
    date_of_birth: Optional[date] = None
    gender: Optional[str] = None
    phone: Optional[str] = None

    # Doctor-specific fields
    license_number: Optional[str] = None
    specialization: Optional[str] = None
    experience: Optional[int] = Field(None, ge=0)

    # Pharmacy-specific fields
    pharmacy_name: Optional[str] = None
    address: Optional[str] = None
    operating_hours: Optional[Any] = None

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ✅ Response schema for user info
class UserResponse(BaseModel):
    id: str
    email: str
    role: Role
    is_active: bool
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    created_at: datetime
    model_config = ConfigDict(from_attributes=True)


# ✅ Response schema for user registration
class UserRegisterResponse(BaseModel):
    user: UserResponse


# ✅ User login request
class UserLogin(BaseModel):
    email: EmailStr
    password: str

    @field_validator("email", mode="before")
    def normalize_email(cls, v):
        if isinstance(v, str):
            return v.strip().lower()
        return v


# ✅ Response schema for user login
class UserLoginResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
    user: UserResponse


# ✅ Response schema for the current user with their role profile
class CurrentUserResponse(BaseModel):
    user: UserResponse
    profile: Optional[Union[PatientResponse, DoctorResponse, PharmacyResponse]] = None


# ✅ Response schema for user logout
class UserLogoutResponse(BaseModel):
    message: str


# ✅ Response schema for token refresh
class UserRefreshResponse(BaseModel):
    access_token: str
    refresh_token: str
    token_type: str
