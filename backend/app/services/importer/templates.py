"""Downloadable example files for the bulk question upload."""

import csv
import io
from functools import lru_cache

from openpyxl import Workbook

TEMPLATE_COLUMNS = ("question_text", "question_type", "options", "required", "placeholder")
TEMPLATE_SHEET_TITLE = "Questions Template"
CSV_TEMPLATE_FILENAME = "questions_template.csv"
EXCEL_TEMPLATE_FILENAME = "questions_template.xlsx"
EXCEL_MEDIA_TYPE = "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"

TEMPLATE_ROWS: tuple[tuple[str, str, str, bool, str], ...] = (
    ("What is your full name?", "text", "", True, "Enter your full name"),
    ("What is your age?", "number", "", True, "Enter your age"),
    ("What is your email?", "email", "", True, "Enter your email address"),
    ("Select your gender", "mcq", "Male,Female,Other", True, ""),
    (
        "Choose your preferred languages",
        "checkbox",
        "English,Hindi,Tamil,Telugu,Bengali",
        False,
        "",
    ),
    (
        "Select your state",
        "dropdown",
        "Maharashtra,Delhi,Karnataka,Tamil Nadu,Gujarat",
        True,
        "",
    ),
    (
        "Describe your medical history",
        "textarea",
        "",
        False,
        "Provide any relevant medical history",
    ),
    ("What is your date of birth?", "date", "", True, ""),
)


def build_csv_template() -> str:
    """CSV template. Options cells are quoted because they contain commas."""
    buffer = io.StringIO()
    writer = csv.writer(buffer, lineterminator="\n")
    writer.writerow(TEMPLATE_COLUMNS)
    for text, question_type, options, required, placeholder in TEMPLATE_ROWS:
        writer.writerow([text, question_type, options, "true" if required else "false", placeholder])
    return buffer.getvalue()


@lru_cache(maxsize=1)
def build_excel_template() -> bytes:
    """XLSX template, built once per process so its ETag stays stable."""
    workbook = Workbook()
    sheet = workbook.active
    sheet.title = TEMPLATE_SHEET_TITLE
    sheet.append(TEMPLATE_COLUMNS)
    for row in TEMPLATE_ROWS:
        sheet.append(list(row))

    buffer = io.BytesIO()
    workbook.save(buffer)
    return buffer.getvalue()
