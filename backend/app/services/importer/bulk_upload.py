"""Bulk question upload: checks preconditions and drives the import pipeline."""

from dataclasses import dataclass, field
from pathlib import PurePath
from typing import Any
from uuid import UUID

from sqlalchemy.orm import Session

from app.core.config import settings
from app.core.logging import get_logger
from app.models.question import Question
from app.models.section import Section
from app.services.importer.exceptions import (
    BulkUploadError,
    BulkUploadFailedError,
    FileTooLargeError,
    NoFileError,
    SectionIdRequiredError,
    SectionNotFoundError,
    UnsupportedFileTypeError,
)
from app.services.importer.file_parser import FileParser
from app.services.importer.ordering import OrderAllocator
from app.services.importer.row_mapper import RowMapper
from app.services.importer.validators import QuestionValidator, RowError
from app.services.importer.writer import QuestionWriter

logger = get_logger(__name__)

ALLOWED_CONTENT_TYPES = frozenset(
    {
        "text/csv",
        "application/vnd.ms-excel",
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet",
    }
)
ALLOWED_EXTENSIONS = frozenset({".csv", ".xlsx", ".xls"})


@dataclass
class UploadResult:
    """Counts, row errors and inserted questions for one upload."""

    total_rows: int
    inserted: list[Question] = field(default_factory=list)
    errors: list[RowError] = field(default_factory=list)
    committed: bool = False

    @property
    def inserted_rows(self) -> int:
        return len(self.inserted)

    @property
    def failed_rows(self) -> int:
        return len(self.errors)

    @property
    def succeeded(self) -> bool:
        """False only when rows were eligible and every one failed to insert."""
        return self.committed

    def summary(self) -> dict[str, Any]:
        return {
            "total_rows": self.total_rows,
            "inserted_rows": self.inserted_rows,
            "failed_rows": self.failed_rows,
            "error_details": [error.to_dict() for error in self.errors],
        }


def check_upload_file(filename: str | None, content_type: str | None, size: int) -> None:
    """Transport-level checks: size first, then CSV/Excel type by MIME or suffix."""
    if size > settings.BULK_UPLOAD_MAX_BYTES:
        raise FileTooLargeError(size, settings.BULK_UPLOAD_MAX_BYTES)

    extension = PurePath(filename or "").suffix.lower()
    if content_type not in ALLOWED_CONTENT_TYPES and extension not in ALLOWED_EXTENSIONS:
        raise UnsupportedFileTypeError(filename, content_type)


class BulkQuestionImporter:
    """Import questions from an uploaded CSV/Excel file into one section.

    Steps: parse -> map aliases -> validate (collecting row errors) ->
    assign orders from the section's current max -> insert with per-row
    savepoints -> commit, or roll back when nothing could be inserted.
    """

    def __init__(
        self,
        db: Session,
        mapper: RowMapper | None = None,
        validator: QuestionValidator | None = None,
    ):
        self.db = db
        self.mapper = mapper or RowMapper()
        self.validator = validator or QuestionValidator()

    def load_section(self, section_id: str | None) -> Section:
        if not section_id or not section_id.strip():
            raise SectionIdRequiredError()

        try:
            section_uuid = UUID(section_id.strip())
        except ValueError:
            raise SectionNotFoundError(section_id) from None

        section = self.db.get(Section, section_uuid)
        if section is None:
            raise SectionNotFoundError(section_id)
        return section

    def run(
        self,
        *,
        content: bytes | None,
        filename: str | None,
        content_type: str | None,
        section_id: str | None,
        insurance_provider_id: str | None = None,
        uploaded_by: UUID | None = None,
    ) -> UploadResult:
        """
        Run a bulk upload.

        Args:
            content: Raw file bytes, None when no file part was sent
            filename: Original filename, picks the parser
            content_type: Declared MIME type
            section_id: Target section id as sent by the client
            insurance_provider_id: Provider id as sent by the client (logged only)
            uploaded_by: Id of the admin performing the upload

        Returns:
            UploadResult. ``committed`` is False when every eligible row failed
            to insert and the transaction was rolled back.

        Raises:
            BulkUploadError: For whole-request precondition failures
        """
        if content is None:
            raise NoFileError()
        check_upload_file(filename, content_type, len(content))
        section = self.load_section(section_id)

        log_context = {
            "section_id": str(section.id),
            "section_provider_id": section.insurance_provider_id,
            "insurance_provider_id": insurance_provider_id,
            "uploaded_by": str(uploaded_by) if uploaded_by else None,
            "upload_filename": filename,
            "size_bytes": len(content),
        }
        logger.info("bulk_upload_started", extra=log_context)

        try:
            rows = FileParser(filename).parse(content)
            candidates = [self.mapper.map_row(row) for row in rows]
            valid_rows, errors = self.validator.validate_all(candidates)

            OrderAllocator.for_section(self.db, section.id).assign(valid_rows)
            written = QuestionWriter(self.db, section.id).write(valid_rows)
        except BulkUploadError:
            raise
        except Exception as e:
            self.db.rollback()
            logger.exception("bulk_upload_failed", extra={**log_context, "error": str(e)})
            raise BulkUploadFailedError(str(e)) from e

        # Row numbers keep errors in file order across both phases
        errors = sorted(errors + written.failed, key=lambda error: error.row)
        result = UploadResult(
            total_rows=len(rows),
            inserted=written.inserted,
            errors=errors,
            committed=written.committed,
        )

        logger.info(
            "bulk_upload_completed",
            extra={
                **log_context,
                "total_rows": result.total_rows,
                "inserted_rows": result.inserted_rows,
                "failed_rows": result.failed_rows,
                "committed": result.committed,
            },
        )
        return result
