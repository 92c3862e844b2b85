"""Bulk question upload result schemas.

Counts and error details stay snake_case on the wire; the embedded
questions use the regular camelCase question DTO.
"""

from pydantic import BaseModel

from app.schemas.question import QuestionResponse


class RowErrorDetail(BaseModel):
    row: int
    error: str


class BulkUploadData(BaseModel):
    total_rows: int
    inserted_rows: int
    failed_rows: int
    error_details: list[RowErrorDetail]
    questions: list[QuestionResponse] | None = None
