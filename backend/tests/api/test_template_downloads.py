"""Tests for the bulk upload template downloads."""

import csv
import io

from openpyxl import load_workbook

from app.services.importer.file_parser import FileParser
from app.services.importer.row_mapper import RowMapper
from app.services.importer.validators import QuestionValidator


def test_csv_template(client, admin_headers):
    response = client.get("/api/questions/template/csv", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith("text/csv")
    assert (
        response.headers["content-disposition"] == "attachment; filename=questions_template.csv"
    )
    rows = list(csv.reader(io.StringIO(response.text)))
    assert rows[0] == ["question_text", "question_type", "options", "required", "placeholder"]
    assert len(rows) == 9
    assert rows[4] == ["Select your gender", "mcq", "Male,Female,Other", "true", ""]
    assert {row[1] for row in rows[1:]} == {
        "text",
        "number",
        "email",
        "mcq",
        "checkbox",
        "dropdown",
        "textarea",
        "date",
    }


def test_csv_template_is_importable(client, admin_headers):
    content = client.get("/api/questions/template/csv", headers=admin_headers).content

    candidates = [RowMapper().map_row(row) for row in FileParser("t.csv").parse(content)]
    valid, errors = QuestionValidator().validate_all(candidates)

    assert errors == []
    assert len(valid) == 8
    assert [row.required for row in valid] == [True, True, True, True, False, True, False, True]


def test_excel_template(client, admin_headers):
    response = client.get("/api/questions/template/excel", headers=admin_headers)

    assert response.status_code == 200
    assert response.headers["content-type"].startswith(
        "application/vnd.openxmlformats-officedocument.spreadsheetml.sheet"
    )
    assert "questions_template.xlsx" in response.headers["content-disposition"]

    workbook = load_workbook(io.BytesIO(response.content))
    sheet = workbook.active
    assert sheet.title == "Questions Template"
    rows = list(sheet.iter_rows(values_only=True))
    assert rows[0] == ("question_text", "question_type", "options", "required", "placeholder")
    assert len(rows) == 9

    parsed = FileParser("t.xlsx").parse(response.content)
    assert parsed[4].get("required") == "false"
    assert parsed[5].get("options") == "Maharashtra,Delhi,Karnataka,Tamil Nadu,Gujarat"


def test_template_etag_not_modified(client, admin_headers):
    first = client.get("/api/questions/template/csv", headers=admin_headers)
    etag = first.headers["etag"]

    second = client.get(
        "/api/questions/template/csv",
        headers={**admin_headers, "If-None-Match": etag},
    )

    assert second.status_code == 304
    assert second.headers["etag"] == etag


def test_templates_require_admin(client, user_headers):
    assert client.get("/api/questions/template/csv").status_code == 401
    assert client.get("/api/questions/template/excel", headers=user_headers).status_code == 403
