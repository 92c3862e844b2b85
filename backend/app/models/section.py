"""Form section model."""

import uuid

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, Integer, String, Text, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class Section(Base):
    """Named group of questions belonging to one insurance provider."""

    __tablename__ = "sections"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    insurance_provider_id = Column(
        String(100),
        ForeignKey("insurance_providers.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    title = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    order = Column(Integer, nullable=False, default=0)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    insurance_provider = relationship("InsuranceProvider", back_populates="sections")
    questions = relationship(
        "Question",
        back_populates="section",
        cascade="all, delete-orphan",
        order_by="Question.order",
    )
    form_responses = relationship(
        "FormResponse", back_populates="section", cascade="all, delete-orphan"
    )
