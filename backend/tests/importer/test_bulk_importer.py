"""Tests for the bulk import orchestration outside HTTP."""

import pytest
from sqlalchemy.orm import Session

from app.models.section import Section
from app.services.importer.bulk_upload import BulkQuestionImporter, check_upload_file
from app.services.importer.exceptions import (
    FileTooLargeError,
    NoFileError,
    SectionIdRequiredError,
    UnsupportedFileTypeError,
)


class TestCheckUploadFile:
    @pytest.mark.parametrize(
        "filename,content_type",
        [
            ("q.csv", "text/csv"),
            ("q.XLSX", None),
            ("q.xls", "application/octet-stream"),
            ("upload", "application/vnd.ms-excel"),
        ],
    )
    def test_accepted(self, filename, content_type):
        check_upload_file(filename, content_type, 10)

    def test_rejected_type(self):
        with pytest.raises(UnsupportedFileTypeError):
            check_upload_file("q.pdf", "application/pdf", 10)

    def test_size_checked_before_type(self):
        with pytest.raises(FileTooLargeError):
            check_upload_file("q.pdf", "application/pdf", 10 * 1024 * 1024)


class TestImporter:
    def test_no_file_checked_first(self, db: Session):
        with pytest.raises(NoFileError):
            BulkQuestionImporter(db).run(
                content=None, filename=None, content_type=None, section_id=None
            )

    def test_blank_section_id(self, db: Session):
        with pytest.raises(SectionIdRequiredError):
            BulkQuestionImporter(db).run(
                content=b"label\nA\n", filename="q.csv", content_type="text/csv", section_id="  "
            )

    def test_summary(self, db: Session, section: Section):
        content = b"label,type,required\nA,text,\n,text,\nB,email,1\n"

        result = BulkQuestionImporter(db).run(
            content=content, filename="q.csv", content_type="text/csv", section_id=str(section.id)
        )

        assert result.succeeded is True
        assert result.summary() == {
            "total_rows": 3,
            "inserted_rows": 2,
            "failed_rows": 1,
            "error_details": [{"row": 3, "error": "Question text is required"}],
        }
        assert [(q.label, q.required, q.order) for q in result.inserted] == [
            ("A", False, 0),
            ("B", True, 1),
        ]
