"""Question model."""

import uuid
from enum import Enum

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Text,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.db.types import JSONType


class QuestionType(str, Enum):
    """Closed vocabulary of question input types."""

    TEXT = "text"
    TEXTAREA = "textarea"
    MCQ = "mcq"
    CHECKBOX = "checkbox"
    DROPDOWN = "dropdown"
    NUMBER = "number"
    DATE = "date"
    EMAIL = "email"
    PHONE = "phone"
    SELECT = "select"


# Types whose answers are picked from a list of options
CHOICE_TYPES = frozenset(
    {QuestionType.MCQ, QuestionType.CHECKBOX, QuestionType.DROPDOWN, QuestionType.SELECT}
)


class Question(Base):
    """Single form field inside a section.

    ``options`` holds ``[{id, label, value}, ...]`` for choice types and is
    null for everything else.
    """

    __tablename__ = "questions"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    section_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
    )
    type = Column(String(20), nullable=False, default=QuestionType.TEXT.value)
    label = Column(Text, nullable=False)
    placeholder = Column(Text, nullable=True, default="")
    required = Column(Boolean, nullable=False, default=True)
    options = Column(JSONType, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    section = relationship("Section", back_populates="questions")

    __table_args__ = (
        Index("ix_questions_section_order", "section_id", "order"),
        CheckConstraint(
            "type IN (" + ", ".join(f"'{t.value}'" for t in QuestionType) + ")",
            name="ck_questions_type",
        ),
    )
