"""Database models."""

# Import all models here so Alembic and create_all can detect them
from app.models.form_response import FormResponse, ResponseStatus
from app.models.provider import InsuranceProvider
from app.models.question import CHOICE_TYPES, Question, QuestionType
from app.models.section import Section
from app.models.user import User, UserRole

__all__ = [
    "User",
    "UserRole",
    "InsuranceProvider",
    "Section",
    "Question",
    "QuestionType",
    "CHOICE_TYPES",
    "FormResponse",
    "ResponseStatus",
]
