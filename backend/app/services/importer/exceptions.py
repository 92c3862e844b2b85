"""Whole-request failures raised by the bulk question import pipeline.

Each exception carries a stable ``code`` and the HTTP status the endpoint
should answer with. Row-level problems are never raised; they are collected
as :class:`~app.services.importer.validators.RowError`.
"""

from typing import Any


class BulkUploadError(Exception):
    """Base class for bulk upload precondition failures."""

    code = "BULK_UPLOAD_ERROR"
    status_code = 400

    def __init__(self, message: str, details: dict[str, Any] | None = None):
        super().__init__(message)
        self.message = message
        self.details = details


class NoFileError(BulkUploadError):
    code = "NO_FILE"

    def __init__(self):
        super().__init__("No file uploaded")


class UnsupportedFileTypeError(BulkUploadError):
    code = "UNSUPPORTED_FILE_TYPE"

    def __init__(self, filename: str | None, content_type: str | None):
        super().__init__(
            "Only CSV and Excel files are allowed",
            {"filename": filename, "content_type": content_type},
        )


class FileTooLargeError(BulkUploadError):
    code = "FILE_TOO_LARGE"
    status_code = 413

    def __init__(self, size: int, limit: int):
        super().__init__(
            f"File exceeds maximum upload size of {limit} bytes",
            {"size": size, "limit": limit},
        )


class SectionIdRequiredError(BulkUploadError):
    code = "SECTION_ID_REQUIRED"

    def __init__(self):
        super().__init__("Section ID is required")


class SectionNotFoundError(BulkUploadError):
    code = "SECTION_NOT_FOUND"
    status_code = 404

    def __init__(self, section_id: str):
        super().__init__("Section not found", {"section_id": section_id})


class FileParseError(BulkUploadError):
    code = "FILE_PARSE_ERROR"


class EmptyFileError(BulkUploadError):
    code = "EMPTY_FILE"

    def __init__(self):
        super().__init__("File is empty or has no data rows")


class BulkUploadFailedError(BulkUploadError):
    """Unexpected failure after the unit of work started; already rolled back."""

    code = "BULK_UPLOAD_FAILED"
    status_code = 500

    def __init__(self, reason: str):
        super().__init__(f"Bulk upload failed: {reason}", {"error_details": reason})
