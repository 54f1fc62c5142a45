# =============================================================================
# core/models/user.py - User Schemas
# =============================================================================
# These models define the API contract for user operations:
# - UserCreate: Input for creating a user (admin endpoint, registration)
# - UserUpdate: Partial update; only sent fields are applied
# - UserResponse: Output, never includes the password hash
# =============================================================================

from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from .base import NOT_NULL_MESSAGE, CamelModel, RequestModel
from .enums import UserRole

PHONE_PATTERN = r"^\+?[\d\s\-()]+$"


class UserCreate(RequestModel):
    """
    Schema for creating a user.

    Example:
        {
            "email": "jane@example.com",
            "userName": "jane",
            "firstName": "Jane",
            "lastName": "Doe",
            "password": "secret1",
            "role": "USER"
        }
    """

    email: EmailStr
    user_name: str = Field(..., min_length=3, max_length=30)
    first_name: str = Field(..., min_length=1, max_length=50)
    last_name: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=30, pattern=PHONE_PATTERN)
    role: Optional[UserRole] = Field(
        default=None,
        description="Honored only when an ADMIN creates the user"
    )


class UserUpdate(RequestModel):
    """
    Schema for updating a user. All fields optional.

    A changed password is re-hashed; a changed role requires ADMIN.
    """

    email: Optional[EmailStr] = None
    user_name: Optional[str] = Field(default=None, min_length=3, max_length=30)
    first_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    last_name: Optional[str] = Field(default=None, min_length=1, max_length=50)
    password: Optional[str] = Field(default=None, min_length=6, max_length=128)
    phone: Optional[str] = Field(default=None, max_length=30, pattern=PHONE_PATTERN)
    role: Optional[UserRole] = None

    @field_validator("email", "user_name", "first_name", "last_name", "password", "role")
    @classmethod
    def reject_null(cls, value):
        if value is None:
            raise ValueError(NOT_NULL_MESSAGE)
        return value


class UserResponse(CamelModel):
    """
    Schema for returning user data to clients.

    Example:
        {
            "id": "550e8400-e29b-41d4-a716-446655440000",
            "email": "jane@example.com",
            "userName": "jane",
            "firstName": "Jane",
            "lastName": "Doe",
            "phone": null,
            "role": "USER",
            "isVerified": false,
            "createdAt": "2024-01-15T10:30:00Z",
            "updatedAt": "2024-01-15T10:30:00Z"
        }
    """

    id: UUID
    email: str
    user_name: str
    first_name: str
    last_name: str
    phone: Optional[str] = None
    role: UserRole
    is_verified: bool = False
    created_at: datetime
    updated_at: Optional[datetime] = None
