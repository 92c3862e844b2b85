"""Validators for import engine."""

import uuid
from dataclasses import dataclass, field
from typing import Any

from app.models.question import CHOICE_TYPES, QuestionType
from app.services.importer.options import OptionSynthesizer
from app.services.importer.row_mapper import CandidateRow

VALID_TYPES = ", ".join(t.value for t in QuestionType)

# Only these markers mean "required"; anything else present means optional
REQUIRED_TRUE_MARKERS = frozenset({"true", "1"})


@dataclass(frozen=True)
class RowError:
    """Row-level failure reported back to the uploader."""

    row: int
    error: str

    def to_dict(self) -> dict[str, Any]:
        return {"row": self.row, "error": self.error}


@dataclass
class ValidatedRow:
    """Row that passed validation. ``order`` is assigned after validation."""

    row_number: int
    id: uuid.UUID
    label: str
    type: QuestionType
    required: bool
    placeholder: str
    options: list[dict[str, str]] | None = None
    order: int | None = field(default=None)


def coerce_required(value: str | bool | None) -> bool:
    """
    Interpret a ``required`` cell.

    Missing column -> True. Otherwise True only for ``"true"``, ``"1"`` or a
    boolean True. ``"TRUE"``, ``"yes"``, ``""`` and ``"0"`` are all False.
    """
    if value is None:
        return True
    if value is True:
        return True
    return value in REQUIRED_TRUE_MARKERS


class QuestionValidator:
    """Validate candidate rows. Pure: no database access."""

    TEXT_REQUIRED = "Question text is required"

    def __init__(self, option_synthesizer: OptionSynthesizer | None = None):
        self.option_synthesizer = option_synthesizer or OptionSynthesizer()

    def validate(self, candidate: CandidateRow) -> ValidatedRow | RowError:
        """
        Validate one candidate row. First failing rule wins.

        Args:
            candidate: Row with aliases resolved

        Returns:
            ValidatedRow on success, RowError otherwise
        """
        label = candidate.text.strip()
        if not label:
            return RowError(candidate.row_number, self.TEXT_REQUIRED)

        raw_type = candidate.type.strip().lower()
        try:
            question_type = QuestionType(raw_type)
        except ValueError:
            return RowError(
                candidate.row_number,
                f"Invalid question type: {raw_type}. Valid types: {VALID_TYPES}",
            )

        options = None
        if question_type in CHOICE_TYPES and candidate.options.strip():
            options = self.option_synthesizer.synthesize(candidate.options)

        return ValidatedRow(
            row_number=candidate.row_number,
            id=uuid.uuid4(),
            label=label,
            type=question_type,
            required=coerce_required(candidate.required),
            placeholder=candidate.placeholder,
            options=options,
        )

    def validate_all(
        self, candidates: list[CandidateRow]
    ) -> tuple[list[ValidatedRow], list[RowError]]:
        """Classify every row; never stops at the first invalid one."""
        valid: list[ValidatedRow] = []
        errors: list[RowError] = []
        for candidate in candidates:
            result = self.validate(candidate)
            if isinstance(result, RowError):
                errors.append(result)
            else:
                valid.append(result)
        return valid, errors
