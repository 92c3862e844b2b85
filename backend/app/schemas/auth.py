"""Authentication schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.common import CamelModel


# Request schemas
class RegisterRequest(CamelModel):
    """Register request schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    password: str = Field(..., min_length=6, max_length=128)
    role: UserRole
    insurance_provider_id: str | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


class LoginRequest(CamelModel):
    """Login request schema. The role picks which portal the user signs into."""

    email: EmailStr
    password: str
    role: UserRole

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        """Normalize email to lowercase."""
        return v.lower().strip()


# Response schemas
class UserResponse(CamelModel):
    """User response schema."""

    id: UUID
    name: str
    email: str
    phone: str | None = None
    role: UserRole
    insurance_provider_id: str | None = None
    is_active: bool
    created_at: datetime


class UserSummary(CamelModel):
    id: UUID
    name: str
    email: str
    phone: str | None = None


class AuthResponse(CamelModel):
    """User plus bearer token."""

    user: UserResponse
    token: str
