"""Insurance provider schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.common import CamelModel


class ProviderCreate(CamelModel):
    """Create provider. The id is a slug chosen by the admin."""

    id: str = Field(..., min_length=1, max_length=100)
    name: str = Field(..., min_length=1, max_length=255)
    logo: str | None = None
    description: str | None = None
    is_active: bool = True


class ProviderUpdate(CamelModel):
    name: str | None = Field(default=None, min_length=1, max_length=255)
    logo: str | None = None
    description: str | None = None
    is_active: bool | None = None


class ProviderResponse(CamelModel):
    id: str
    name: str
    logo: str | None = None
    description: str | None = None
    is_active: bool
    created_at: datetime


class ProviderSummary(CamelModel):
    id: str
    name: str
    logo: str | None = None
