# app/users/auth_services.py
import logging
from typing import Optional

from fastapi import HTTPException, status
from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from app.helpers.ids import new_id
from app.shared.enums import Role
from app.shared.exceptions import Unauthenticated
from app.system_services.profiles import build_profile, find_profile, Profile
from app.users.user_models.schemas import UserLogin, UserRegister
from app.users.user_models.user_model import User
from app.users.auth_token_model.token_model import Token
from app.users.security import (
    get_password_hash,
    verify_password,
    create_access_token,
    create_refresh_token,
    decode_token,
)

logger = logging.getLogger(__name__)


def _claims(user: User) -> dict:
    return {"sub": user.email, "user_id": user.id, "role": user.role}


# ============================================================
# ✅ REGISTER A NEW USER
# ============================================================
async def registering_user(user_data: UserRegister, db: AsyncSession) -> User:
    # Check if user already exists
    result = await db.execute(select(User).where(User.email == user_data.email))
    if result.scalars().first():
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="User already exists with this email"
        )

    user_id = new_id()
    # Role-required fields are checked before anything is staged
    profile = build_profile(user_id, user_data)

    new_user = User(
        id=user_id,
        email=user_data.email,
        hashed_password=get_password_hash(user_data.password),
        first_name=user_data.first_name,
        last_name=user_data.last_name,
        role=user_data.role.value,
    )
    db.add(new_user)
    await db.flush()
    db.add(profile)
    await db.commit()
    await db.refresh(new_user)

    logger.info(f"✅ Registered {new_user.role} user {new_user.id}")
    return new_user


# ============================================================
# ✅ AUTHENTICATE USER
# ============================================================
async def authenticate_user(
    email: str, password: str, db: AsyncSession
) -> Optional[User]:
    result = await db.execute(select(User).where(User.email == email))
    user = result.scalars().first()

    if not user:
        return None

    if not verify_password(password, user.hashed_password):
        return None

    return user


# ============================================================
# ✅ LOGIN USER
# ============================================================
async def login_user(user_data: UserLogin, db: AsyncSession) -> tuple[str, str, User]:
    user = await authenticate_user(user_data.email, user_data.password, db)
    if not user:
        raise Unauthenticated("Invalid credentials")

    if not user.is_active:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Inactive user"
        )

    access_token = await create_access_token(data=_claims(user), db=db)
    refresh_token = await create_refresh_token(data=_claims(user), db=db)

    return access_token, refresh_token, user


# ============================================================
# ✅ REFRESH ACCESS TOKEN
# ============================================================
async def refresh_access_token(
    refresh_token: str, db: AsyncSession
) -> tuple[str, str]:
    payload = decode_token(refresh_token)
    if not payload or payload.get("type") != "refresh":
        raise Unauthenticated("Invalid refresh token")

    result = await db.execute(select(Token).where(Token.token_string == refresh_token))
    stored_token = result.scalars().first()

    if not stored_token or stored_token.is_revoked:
        raise Unauthenticated("Refresh token revoked or invalid")

    result = await db.execute(select(User).where(User.email == payload.get("sub")))
    user = result.scalars().first()

    if not user or not user.is_active:
        raise Unauthenticated("User inactive or not found")

    # Revoke old refresh token before rotating
    stored_token.is_revoked = True
    access_token = await create_access_token(data=_claims(user), db=db)
    new_refresh_token = await create_refresh_token(data=_claims(user), db=db)

    return access_token, new_refresh_token


# ============================================================
# ✅ LOGOUT USER (Global Revocation)
# ============================================================
async def logout_user(user: User, db: AsyncSession) -> None:
    await db.execute(
        update(Token)
        .where(Token.user_id == user.id)
        .values(is_revoked=True)
    )
    await db.commit()


# ============================================================
# ✅ CURRENT USER PROFILE
# ============================================================
async def load_user_profile(user: User, db: AsyncSession) -> Optional[Profile]:
    return await find_profile(db, Role(user.role), user.id)
