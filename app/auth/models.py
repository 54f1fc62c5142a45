# =============================================================================
# app/auth/models.py - Authentication Models
# =============================================================================
# Pydantic models for authentication data:
# - Identity: who is making the request (from a verified token)
# - TokenClaims: decoded session token payload
# - RegisterRequest / LoginRequest / RefreshRequest: auth endpoint inputs
# - AuthResponse: token plus profile returned by login and refresh
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field

from core.models import CamelModel, RequestModel, UserCreate, UserResponse, UserRole


class Identity(BaseModel):
    """
    Authenticated requester extracted from a verified token.

    This is the minimal user info available from the token itself,
    without querying the database.
    """

    model_config = ConfigDict(frozen=True)

    id: UUID
    email: str
    role: UserRole

    @property
    def is_admin(self) -> bool:
        return self.role is UserRole.ADMIN


class TokenClaims(BaseModel):
    """
    Decoded session token payload.

    `sub` is the user id; `iat`/`exp` are epoch timestamps.
    """

    sub: UUID
    email: str
    role: UserRole
    iat: Optional[datetime] = None
    exp: Optional[datetime] = None

    def to_identity(self) -> Identity:
        return Identity(id=self.sub, email=self.email, role=self.role)


class RegisterRequest(UserCreate):
    """
    Public registration body.

    `role` is accepted for compatibility but ignored: self-registered
    accounts are always USER.
    """


class LoginRequest(RequestModel):
    email: EmailStr
    password: str = Field(..., min_length=6)


class RefreshRequest(RequestModel):
    token: str = Field(..., min_length=1)


class AuthResponse(CamelModel):
    """
    Example:
        {"accessToken": "eyJhbGciOi...", "user": {"id": "...", "email": "..."}}
    """

    access_token: str
    user: UserResponse
