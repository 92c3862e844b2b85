"""Insurance provider model."""

from sqlalchemy import Boolean, Column, DateTime, String, Text
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class InsuranceProvider(Base):
    """Insurance provider (tenant). The id is an admin-chosen slug."""

    __tablename__ = "insurance_providers"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(String(100), primary_key=True)
    name = Column(String(255), nullable=False)
    logo = Column(Text, nullable=True)
    description = Column(Text, nullable=True)
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    # Relationships
    sections = relationship(
        "Section",
        back_populates="insurance_provider",
        cascade="all, delete-orphan",
        order_by="Section.order",
    )
    agents = relationship("User", back_populates="insurance_provider")
    form_responses = relationship(
        "FormResponse", back_populates="insurance_provider", cascade="all, delete-orphan"
    )
