"""Writer for import engine - insert validated questions in one transaction."""

from dataclasses import dataclass, field
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.question import Question
from app.services.importer.validators import RowError, ValidatedRow

logger = get_logger(__name__)


@dataclass
class WriteResult:
    """Outcome of one batch insert."""

    inserted: list[Question] = field(default_factory=list)
    failed: list[RowError] = field(default_factory=list)
    committed: bool = False

    @property
    def all_failed(self) -> bool:
        return not self.inserted and bool(self.failed)


def database_error_message(exc: SQLAlchemyError) -> str:
    """The driver's own message when there is one, else SQLAlchemy's."""
    orig = getattr(exc, "orig", None)
    return str(orig) if orig is not None else str(exc)


class QuestionWriter:
    """Insert validated rows into a section.

    Every row goes through its own SAVEPOINT so a constraint violation only
    discards that row. The outer transaction is committed when at least one
    row landed and rolled back when every eligible row failed.
    """

    def __init__(self, db: Session, section_id: UUID):
        self.db = db
        self.section_id = section_id

    def build_question(self, row: ValidatedRow) -> Question:
        return Question(
            id=row.id,
            section_id=self.section_id,
            type=row.type.value,
            label=row.label,
            placeholder=row.placeholder,
            required=row.required,
            options=row.options,
            order=row.order,
        )

    def insert_row(self, row: ValidatedRow) -> Question | RowError:
        """Insert one row inside a SAVEPOINT."""
        question = self.build_question(row)
        try:
            with self.db.begin_nested():
                self.db.add(question)
        except SQLAlchemyError as e:
            message = database_error_message(e)
            logger.warning(
                "bulk_upload_row_insert_failed",
                extra={
                    "section_id": str(self.section_id),
                    "row": row.row_number,
                    "error": message,
                },
            )
            return RowError(row.row_number, message)
        return question

    def write(self, rows: list[ValidatedRow]) -> WriteResult:
        """
        Insert all rows and settle the transaction.

        Args:
            rows: Validated rows with orders assigned

        Returns:
            WriteResult with inserted questions, row errors and commit flag
        """
        result = WriteResult()
        for outcome in (self.insert_row(row) for row in rows):
            if isinstance(outcome, RowError):
                result.failed.append(outcome)
            else:
                result.inserted.append(outcome)

        if rows and not result.inserted:
            self.db.rollback()
            logger.warning(
                "bulk_upload_rolled_back",
                extra={"section_id": str(self.section_id), "failed_rows": len(result.failed)},
            )
            return result

        self.db.commit()
        result.committed = True
        return result
