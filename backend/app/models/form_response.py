"""Form response model."""

import uuid
from enum import Enum

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    ForeignKey,
    String,
    UniqueConstraint,
    Uuid,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base
from app.db.types import JSONType


class ResponseStatus(str, Enum):
    """Form response lifecycle."""

    DRAFT = "DRAFT"
    SUBMITTED = "SUBMITTED"


class FormResponse(Base):
    """A user's answers for one section. One row per (user, section)."""

    __tablename__ = "form_responses"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    user_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    section_id = Column(
        Uuid(as_uuid=True),
        ForeignKey("sections.id", ondelete="CASCADE"),
        nullable=False,
    )
    insurance_provider_id = Column(
        String(100),
        ForeignKey("insurance_providers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    responses = Column(JSONType, nullable=False, default=dict)
    status = Column(String(20), nullable=False, default=ResponseStatus.DRAFT.value, index=True)
    is_submitted = Column(Boolean, nullable=False, default=False)
    submitted_at = Column(DateTime(timezone=True), nullable=True)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    user = relationship("User", back_populates="form_responses")
    section = relationship("Section", back_populates="form_responses")
    insurance_provider = relationship("InsuranceProvider", back_populates="form_responses")

    __table_args__ = (
        UniqueConstraint("user_id", "section_id", name="uq_form_responses_user_section"),
    )
