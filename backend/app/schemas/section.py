"""Section schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.schemas.common import CamelModel
from app.schemas.question import QuestionResponse


class SectionCreate(CamelModel):
    insurance_provider_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = None
    order: int = 0
    is_active: bool = True


class SectionUpdate(CamelModel):
    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = None
    order: int | None = None
    is_active: bool | None = None


class SectionResponse(CamelModel):
    """Section with its questions in display order."""

    id: UUID
    insurance_provider_id: str
    title: str
    description: str | None = None
    order: int
    is_active: bool
    created_at: datetime
    questions: list[QuestionResponse] = []


class SectionSummary(CamelModel):
    id: UUID
    title: str
    description: str | None = None


class ReorderQuestionsRequest(CamelModel):
    """New question order: position in the list becomes ``order``."""

    question_ids: list[UUID]
