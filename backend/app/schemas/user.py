"""Admin user management schemas."""

from pydantic import EmailStr, Field, field_validator

from app.models.user import UserRole
from app.schemas.common import CamelModel


class UserUpdate(CamelModel):
    """Partial user update (admin only)."""

    name: str | None = Field(default=None, min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(default=None, max_length=50)
    role: UserRole | None = None
    insurance_provider_id: str | None = None
    is_active: bool | None = None

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str | None) -> str | None:
        """Normalize email to lowercase."""
        return v.lower().strip() if v else v
