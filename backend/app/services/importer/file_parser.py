"""Tabular file parser for bulk question imports (CSV, XLSX, XLS)."""

import csv
import io
from dataclasses import dataclass
from datetime import date, datetime, time
from pathlib import PurePath
from typing import Any, Iterable, Iterator
from zipfile import BadZipFile

import openpyxl
import xlrd
from openpyxl.utils.exceptions import InvalidFileException
from xlrd.compdoc import CompDocError

from app.services.importer.exceptions import EmptyFileError, FileParseError

CSV_EXTENSION = ".csv"
LEGACY_EXCEL_EXTENSION = ".xls"

# Malformed workbook XML surfaces as SyntaxError (ElementTree and lxml parse errors)
XLSX_READ_ERRORS = (
    InvalidFileException,
    BadZipFile,
    KeyError,
    OSError,
    ValueError,
    SyntaxError,
)


@dataclass(frozen=True)
class ParsedRow:
    """One data row keyed by normalized header name.

    ``row_number`` is the 1-based position in the file with the header as
    row 1, so the first data row is row 2.
    """

    row_number: int
    values: dict[str, str]

    def has(self, column: str) -> bool:
        return column in self.values

    def get(self, column: str, default: str | None = None) -> str | None:
        return self.values.get(column, default)


def normalize_header(name: Any) -> str:
    """Header cell -> lookup key: quotes removed, trimmed, lower-cased."""
    if name is None:
        return ""
    return str(name).replace('"', "").strip().lower()


def normalize_cell(value: Any) -> str:
    """Render a spreadsheet cell as the trimmed text a CSV cell would hold."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    if isinstance(value, datetime):
        if value.time() == time.min:
            return value.date().isoformat()
        return value.isoformat()
    if isinstance(value, (date, time)):
        return value.isoformat()
    return str(value).strip()


class FileParser:
    """Parse an uploaded question file into header-keyed rows.

    The filename only selects the reader: ``.csv`` goes through the csv
    module, ``.xls`` through xlrd, anything else is treated as an Excel
    workbook and opened with openpyxl. Only the first sheet is read.
    """

    def __init__(self, filename: str | None):
        self.filename = filename or ""
        self.extension = PurePath(self.filename).suffix.lower()

    def parse(self, content: bytes) -> list[ParsedRow]:
        """
        Parse file content into data rows.

        Args:
            content: Raw file bytes

        Returns:
            Data rows in file order, blank rows skipped

        Raises:
            FileParseError: If the file cannot be decoded or read
            EmptyFileError: If the file has no header or no data rows
        """
        if self.extension == CSV_EXTENSION:
            records = self._read_csv(content)
        elif self.extension == LEGACY_EXCEL_EXTENSION:
            records = self._read_xls(content)
        else:
            records = self._read_xlsx(content)

        rows = list(self._to_rows(records))
        if not rows:
            raise EmptyFileError()
        return rows

    def _to_rows(self, records: Iterable[list[str]]) -> Iterator[ParsedRow]:
        header: list[str] | None = None
        row_number = 1
        for record in records:
            if self._is_blank(record):
                continue
            if header is None:
                header = [normalize_header(cell) for cell in record]
                continue

            row_number += 1
            values: dict[str, str] = {}
            for index, column in enumerate(header):
                if not column:
                    continue
                values[column] = record[index] if index < len(record) else ""
            yield ParsedRow(row_number=row_number, values=values)

    def _is_blank(self, record: list[str]) -> bool:
        """
        CSV lines are blank only when they hold no delimiter, so `,,,` stays a
        data row. Spreadsheet rows are blank when every cell is empty.
        """
        if self.extension == CSV_EXTENSION:
            return len(record) <= 1 and not any(record)
        return not any(record)

    def _read_csv(self, content: bytes) -> list[list[str]]:
        try:
            text = content.decode("utf-8-sig")
        except UnicodeDecodeError as e:
            raise FileParseError(f"Could not parse file: not valid UTF-8 text ({e})") from e

        try:
            reader = csv.reader(io.StringIO(text, newline=""))
            return [[cell.strip() for cell in record] for record in reader]
        except csv.Error as e:
            raise FileParseError(f"Could not parse file: {e}") from e

    def _read_xlsx(self, content: bytes) -> list[list[str]]:
        try:
            workbook = openpyxl.load_workbook(io.BytesIO(content), read_only=True, data_only=True)
        except XLSX_READ_ERRORS as e:
            raise FileParseError(f"Could not parse file: {e}") from e

        try:
            if not workbook.worksheets:
                return []
            sheet = workbook.worksheets[0]
            return [
                [normalize_cell(cell) for cell in row]
                for row in sheet.iter_rows(values_only=True)
            ]
        except XLSX_READ_ERRORS as e:
            raise FileParseError(f"Could not parse file: {e}") from e
        finally:
            workbook.close()

    def _read_xls(self, content: bytes) -> list[list[str]]:
        try:
            book = xlrd.open_workbook(file_contents=content)
        except (xlrd.XLRDError, CompDocError, OSError, ValueError) as e:
            raise FileParseError(f"Could not parse file: {e}") from e

        if book.nsheets == 0:
            return []
        sheet = book.sheet_by_index(0)
        records = []
        for row_index in range(sheet.nrows):
            records.append(
                [self._xls_cell_value(cell, book.datemode) for cell in sheet.row(row_index)]
            )
        return records

    @staticmethod
    def _xls_cell_value(cell: xlrd.sheet.Cell, datemode: int) -> str:
        if cell.ctype in (xlrd.XL_CELL_EMPTY, xlrd.XL_CELL_BLANK, xlrd.XL_CELL_ERROR):
            return ""
        if cell.ctype == xlrd.XL_CELL_BOOLEAN:
            return normalize_cell(bool(cell.value))
        if cell.ctype == xlrd.XL_CELL_DATE:
            return normalize_cell(xlrd.xldate_as_datetime(cell.value, datemode))
        return normalize_cell(cell.value)
