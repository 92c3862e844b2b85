"""Form response schemas."""

from datetime import datetime
from typing import Any
from uuid import UUID

from pydantic import Field

from app.models.form_response import ResponseStatus
from app.schemas.auth import UserSummary
from app.schemas.common import CamelModel
from app.schemas.provider import ProviderSummary
from app.schemas.section import SectionSummary


class SaveResponseRequest(CamelModel):
    """Create or update the caller's draft for a section."""

    section_id: UUID
    insurance_provider_id: str = Field(..., min_length=1)
    responses: dict[str, Any]


class FormResponseResponse(CamelModel):
    id: UUID
    user_id: UUID
    section_id: UUID
    insurance_provider_id: str
    responses: dict[str, Any]
    status: ResponseStatus
    is_submitted: bool
    submitted_at: datetime | None = None
    created_at: datetime
    updated_at: datetime
    user: UserSummary | None = None
    section: SectionSummary | None = None
    insurance_provider: ProviderSummary | None = None
