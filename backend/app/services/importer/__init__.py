"""Import engine for bulk question uploads."""

from app.services.importer.bulk_upload import BulkQuestionImporter, UploadResult
from app.services.importer.exceptions import BulkUploadError
from app.services.importer.file_parser import FileParser, ParsedRow
from app.services.importer.options import OptionSynthesizer
from app.services.importer.ordering import OrderAllocator
from app.services.importer.row_mapper import CandidateRow, RowMapper
from app.services.importer.validators import QuestionValidator, RowError, ValidatedRow
from app.services.importer.writer import QuestionWriter

__all__ = [
    "BulkQuestionImporter",
    "BulkUploadError",
    "CandidateRow",
    "FileParser",
    "OptionSynthesizer",
    "OrderAllocator",
    "ParsedRow",
    "QuestionValidator",
    "QuestionWriter",
    "RowError",
    "RowMapper",
    "UploadResult",
    "ValidatedRow",
]
