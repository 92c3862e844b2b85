"""Tests for the CSV/Excel file parser."""

import io
import zipfile
from datetime import datetime

import pytest
from openpyxl import Workbook

from app.services.importer.exceptions import EmptyFileError, FileParseError
from app.services.importer.file_parser import FileParser, normalize_cell, normalize_header

HEADER = "question_text,question_type,options,required,placeholder\n"


def _xlsx(rows: list[list]) -> bytes:
    workbook = Workbook()
    sheet = workbook.active
    for row in rows:
        sheet.append(row)
    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()


def _zip_with_bad_xml() -> bytes:
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        archive.writestr("[Content_Types].xml", "<bad")
    return buffer.getvalue()


class TestCsvParsing:
    def test_quoted_field_keeps_embedded_delimiter(self):
        content = (HEADER + '"Select, gender",mcq,"Male,Female,Other",true,""\n').encode()

        rows = FileParser("questions.csv").parse(content)

        assert len(rows) == 1
        assert rows[0].values == {
            "question_text": "Select, gender",
            "question_type": "mcq",
            "options": "Male,Female,Other",
            "required": "true",
            "placeholder": "",
        }

    def test_row_numbers_start_at_two(self):
        content = (HEADER + "A,text,,,\nB,text,,,\nC,text,,,\n").encode()

        rows = FileParser("questions.csv").parse(content)

        assert [row.row_number for row in rows] == [2, 3, 4]

    def test_blank_lines_are_skipped(self):
        content = (HEADER + "A,text,,,\n\n   \nB,text,,,\n").encode()

        rows = FileParser("questions.csv").parse(content)

        assert [row.get("question_text") for row in rows] == ["A", "B"]
        assert [row.row_number for row in rows] == [2, 3]

    def test_delimiter_only_line_is_a_data_row(self):
        content = (HEADER + "A,text,,,\n,,,,\nB,text,,,\n").encode()

        rows = FileParser("questions.csv").parse(content)

        assert [row.row_number for row in rows] == [2, 3, 4]
        assert rows[1].get("question_text") == ""
        assert rows[2].get("question_text") == "B"

    def test_headers_are_normalized(self):
        content = b' Question_Text , TYPE \nHello,Text\n'

        rows = FileParser("q.CSV").parse(content)

        assert rows[0].values == {"question_text": "Hello", "type": "Text"}

    def test_values_are_trimmed_and_short_rows_padded(self):
        content = (HEADER + "  Name  , text \n").encode()

        row = FileParser("questions.csv").parse(content)[0]

        assert row.get("question_text") == "Name"
        assert row.get("question_type") == "text"
        assert row.get("required") == ""
        assert row.has("placeholder")

    def test_utf8_bom_is_ignored(self):
        content = "\ufeffquestion_text\nCafé?\n".encode("utf-8")

        rows = FileParser("questions.csv").parse(content)

        assert rows[0].values == {"question_text": "Café?"}

    def test_header_only_is_empty(self):
        with pytest.raises(EmptyFileError) as exc_info:
            FileParser("questions.csv").parse(HEADER.encode())
        assert exc_info.value.message == "File is empty or has no data rows"

    def test_empty_body_is_empty(self):
        with pytest.raises(EmptyFileError):
            FileParser("questions.csv").parse(b"")

    def test_invalid_utf8_is_parse_error(self):
        with pytest.raises(FileParseError):
            FileParser("questions.csv").parse(b"question_text\n\xff\xfe\xfa\n")


class TestExcelParsing:
    def test_first_sheet_rows(self):
        content = _xlsx(
            [
                ["question_text", "question_type", "options", "required", "placeholder"],
                ["Select your gender", "mcq", "Male,Female,Other", True, None],
                ["Age", "number", None, False, "Years"],
            ]
        )

        rows = FileParser("questions.xlsx").parse(content)

        assert [row.row_number for row in rows] == [2, 3]
        assert rows[0].values == {
            "question_text": "Select your gender",
            "question_type": "mcq",
            "options": "Male,Female,Other",
            "required": "true",
            "placeholder": "",
        }
        assert rows[1].get("required") == "false"
        assert rows[1].get("options") == ""

    def test_numeric_cells_render_as_text(self):
        content = _xlsx([["question_text", "required"], ["Age", 1]])

        row = FileParser("questions.xlsx").parse(content)[0]

        assert row.get("required") == "1"

    def test_only_header_is_empty(self):
        content = _xlsx([["question_text", "question_type"]])

        with pytest.raises(EmptyFileError):
            FileParser("questions.xlsx").parse(content)

    def test_garbage_is_parse_error(self):
        with pytest.raises(FileParseError):
            FileParser("questions.xlsx").parse(b"definitely not a workbook")

    def test_malformed_workbook_xml_is_parse_error(self):
        with pytest.raises(FileParseError) as exc_info:
            FileParser("questions.xlsx").parse(_zip_with_bad_xml())
        assert exc_info.value.message.startswith("Could not parse file:")

    def test_garbage_xls_is_parse_error(self):
        with pytest.raises(FileParseError):
            FileParser("questions.xls").parse(b"definitely not a workbook")


class TestNormalization:
    @pytest.mark.parametrize(
        "value,expected",
        [
            (None, ""),
            (True, "true"),
            (False, "false"),
            (3.0, "3"),
            (2.5, "2.5"),
            (7, "7"),
            ("  padded ", "padded"),
            (datetime(1990, 5, 17), "1990-05-17"),
            (datetime(1990, 5, 17, 8, 30), "1990-05-17T08:30:00"),
        ],
    )
    def test_normalize_cell(self, value, expected):
        assert normalize_cell(value) == expected

    def test_normalize_header(self):
        assert normalize_header(' "Question_Text" ') == "question_text"
        assert normalize_header(None) == ""
