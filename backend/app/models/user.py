"""User model."""

import uuid
from enum import Enum

from sqlalchemy import Boolean, Column, DateTime, ForeignKey, String, Uuid
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from app.db.base import Base


class UserRole(str, Enum):
    """User role enum."""

    ADMIN = "admin"
    AGENT = "agent"
    USER = "user"


class User(Base):
    """Portal account. Agents are bound to exactly one insurance provider."""

    __tablename__ = "users"
    __mapper_args__ = {"eager_defaults": True}

    id = Column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    phone = Column(String(50), nullable=True)
    password_hash = Column(String(255), nullable=False)
    role = Column(String(20), nullable=False, default=UserRole.USER.value, index=True)
    insurance_provider_id = Column(
        String(100),
        ForeignKey("insurance_providers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    is_active = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)
    updated_at = Column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )

    # Relationships
    insurance_provider = relationship("InsuranceProvider", back_populates="agents")
    form_responses = relationship(
        "FormResponse", back_populates="user", cascade="all, delete-orphan"
    )
