"""Question schemas."""

from datetime import datetime
from uuid import UUID

from pydantic import Field

from app.models.question import QuestionType
from app.schemas.common import CamelModel


class QuestionOption(CamelModel):
    """Selectable option of a choice-type question."""

    id: str
    label: str
    value: str


class QuestionCreate(CamelModel):
    """Create a single question in a section."""

    type: QuestionType = QuestionType.TEXT
    label: str = Field(..., min_length=1)
    placeholder: str = ""
    required: bool = True
    options: list[QuestionOption] | None = None
    order: int | None = None


class QuestionUpdate(CamelModel):
    """Partial question update."""

    type: QuestionType | None = None
    label: str | None = None
    placeholder: str | None = None
    required: bool | None = None
    options: list[QuestionOption] | None = None
    order: int | None = None


class QuestionResponse(CamelModel):
    """Question as returned to clients."""

    id: UUID
    section_id: UUID
    type: QuestionType
    label: str
    placeholder: str | None = None
    required: bool
    options: list[QuestionOption] | None = None
    order: int
    created_at: datetime
