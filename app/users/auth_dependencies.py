# app/users/auth_dependencies.py
# Centralized Authentication Dependencies

from dataclasses import dataclass
from typing import Optional
from fastapi import Depends, Cookie
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from sqlalchemy import select, and_
from sqlalchemy.ext.asyncio import AsyncSession

from app.database.connection import get_db
from app.shared.enums import Role
from app.shared.exceptions import Forbidden, Unauthenticated
from app.users.user_models.user_model import User
from app.users.auth_token_model.token_model import Token
from app.users.security import decode_token

# Security schemes
security_scheme = HTTPBearer(auto_error=False)  # Don't auto-raise for cookie fallback


@dataclass(frozen=True)
class Caller:
    """Resolved identity of the request, passed explicitly into every core operation."""

    user_id: str
    role: Role


def require_role(caller: Optional[Caller], role: Role, message: str = "Access denied") -> Caller:
    """Role gate used by services before they touch their own entities."""
    if caller is None:
        raise Unauthenticated()
    if caller.role is not role:
        raise Forbidden(message)
    return caller


async def get_current_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security_scheme),
    access_token_cookie: Optional[str] = Cookie(None, alias="access_token"),
) -> str:
    """Raw bearer token from the Authorization header or the access_token cookie."""
    if credentials:
        return credentials.credentials
    if access_token_cookie:
        return access_token_cookie
    raise Unauthenticated("Not authenticated. Provide token in Authorization header or cookie.")


async def get_current_user(
    token_string: str = Depends(get_current_token),
    db: AsyncSession = Depends(get_db)
) -> User:
    """
    Get current authenticated user.

    Validates:
    1. JWT signature and expiry
    2. Token exists in database and is not revoked
    3. User exists and is active

    Raises 401 if any validation fails.
    """
    # 1. Decode JWT (validates signature + expiry)
    payload = decode_token(token_string)
    if not payload or payload.get("type") != "access":
        raise Unauthenticated("Invalid or expired access token")

    # 2. Extract user identifier
    user_email = payload.get("sub")
    if not user_email:
        raise Unauthenticated("Token missing user identifier")

    # 3. Check token revocation status in database
    token_record = await db.execute(
        select(Token).where(
            and_(
                Token.token_string == token_string,
                Token.token_type == "access"
            )
        )
    )
    token_obj = token_record.scalars().first()

    if not token_obj:
        raise Unauthenticated("Token not found. Please log in again.")

    if token_obj.is_revoked:
        raise Unauthenticated("Token has been revoked. Please log in again.")

    # 4. Fetch user from database
    result = await db.execute(
        select(User).where(User.email == user_email)
    )
    user = result.scalars().first()

    if not user:
        raise Unauthenticated("User not found")

    # 5. Check user status
    if not user.is_active:
        raise Forbidden("User account is inactive")

    return user


async def get_caller(
    current_user: User = Depends(get_current_user)
) -> Caller:
    """Credential value threaded into services."""
    return Caller(user_id=current_user.id, role=Role(current_user.role))
