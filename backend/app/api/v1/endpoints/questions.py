"""Question endpoints: admin CRUD, bulk upload and upload templates."""

from uuid import UUID

from fastapi import APIRouter, Depends, File, Form, Query, Request, UploadFile, status
from fastapi.responses import JSONResponse, Response
from sqlalchemy.orm import Session

from app.core.app_exceptions import AppError, raise_bad_request, raise_not_found
from app.core.dependencies import AdminUser
from app.core.etag import check_if_none_match, compute_etag, create_not_modified_response
from app.db.session import get_db
from app.models.question import Question
from app.schemas.bulk_upload import BulkUploadData
from app.schemas.common import ApiResponse
from app.schemas.question import QuestionResponse, QuestionUpdate
from app.services.importer import BulkQuestionImporter, BulkUploadError
from app.services.importer.templates import (
    CSV_TEMPLATE_FILENAME,
    EXCEL_MEDIA_TYPE,
    EXCEL_TEMPLATE_FILENAME,
    build_csv_template,
    build_excel_template,
)

router = APIRouter()


def get_question_or_404(db: Session, question_id: UUID) -> Question:
    question = db.get(Question, question_id)
    if not question:
        raise_not_found("Question")
    return question


@router.get(
    "",
    response_model=ApiResponse[list[QuestionResponse]],
    summary="List questions",
    description="All questions, optionally for one section, in display order.",
)
async def list_questions(
    current_user: AdminUser,
    section_id: UUID | None = Query(default=None, alias="sectionId"),
    db: Session = Depends(get_db),
) -> ApiResponse[list[QuestionResponse]]:
    query = db.query(Question)
    if section_id:
        query = query.filter(Question.section_id == section_id)
    questions = query.order_by(Question.order).all()
    return ApiResponse(data=[QuestionResponse.model_validate(q) for q in questions])


@router.put(
    "/{question_id}",
    response_model=ApiResponse[QuestionResponse],
    summary="Update question",
)
async def update_question(
    question_id: UUID,
    request: QuestionUpdate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[QuestionResponse]:
    """Partially update a question. Fields left out keep their value."""
    if request.label is not None and not request.label.strip():
        raise_bad_request("EMPTY_LABEL", "Question label cannot be empty")

    question = get_question_or_404(db, question_id)

    update_data = request.model_dump(exclude_unset=True)
    if "type" in update_data and update_data["type"] is not None:
        update_data["type"] = update_data["type"].value
    if "label" in update_data and update_data["label"] is not None:
        update_data["label"] = update_data["label"].strip()
    for field, value in update_data.items():
        if value is None and field in ("type", "label", "required", "order"):
            continue
        setattr(question, field, value)

    db.commit()
    db.refresh(question)

    return ApiResponse(
        message="Question updated successfully",
        data=QuestionResponse.model_validate(question),
    )


@router.delete(
    "/{question_id}",
    response_model=ApiResponse[None],
    summary="Delete question",
)
async def delete_question(
    question_id: UUID,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[None]:
    question = get_question_or_404(db, question_id)
    db.delete(question)
    db.commit()
    return ApiResponse(message="Question deleted successfully")


# ============================================================================
# Bulk upload
# ============================================================================


@router.post(
    "/bulk-upload",
    response_model=ApiResponse[BulkUploadData],
    summary="Bulk upload questions",
    description=(
        "Import questions into a section from a CSV or Excel file (max 5 MiB). "
        "Rows that fail validation or insertion are reported in error_details; "
        "the rest are kept. Returns 400 when every row failed to insert."
    ),
)
async def bulk_upload_questions(
    current_user: AdminUser,
    file: UploadFile | None = File(default=None),
    section_id: str | None = Form(default=None, alias="sectionId"),
    insurance_provider_id: str | None = Form(default=None, alias="insuranceProviderId"),
    db: Session = Depends(get_db),
):
    content = await file.read() if file is not None else None

    try:
        result = BulkQuestionImporter(db).run(
            content=content,
            filename=file.filename if file is not None else None,
            content_type=file.content_type if file is not None else None,
            section_id=section_id,
            insurance_provider_id=insurance_provider_id,
            uploaded_by=current_user.id,
        )
    except BulkUploadError as e:
        raise AppError(
            status_code=e.status_code,
            code=e.code,
            message=e.message,
            details=e.details,
        ) from e

    if not result.succeeded:
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "success": False,
                "message": "All rows failed to insert",
                "data": BulkUploadData(**result.summary()).model_dump(exclude={"questions"}),
            },
        )

    data = BulkUploadData(
        **result.summary(),
        questions=[QuestionResponse.model_validate(q) for q in result.inserted],
    )
    return ApiResponse(
        message=f"Successfully uploaded {result.inserted_rows} questions",
        data=data,
    )


# ============================================================================
# Upload templates
# ============================================================================


@router.get(
    "/template/csv",
    summary="Download CSV template",
    response_class=Response,
)
async def download_csv_template(request: Request, current_user: AdminUser) -> Response:
    content = build_csv_template()
    etag = compute_etag(content)
    if check_if_none_match(request, etag):
        return create_not_modified_response(etag)

    return Response(
        content=content,
        media_type="text/csv",
        headers={
            "Content-Disposition": f"attachment; filename={CSV_TEMPLATE_FILENAME}",
            "ETag": etag,
        },
    )


@router.get(
    "/template/excel",
    summary="Download Excel template",
    response_class=Response,
)
async def download_excel_template(request: Request, current_user: AdminUser) -> Response:
    content = build_excel_template()
    etag = compute_etag(content)
    if check_if_none_match(request, etag):
        return create_not_modified_response(etag)

    return Response(
        content=content,
        media_type=EXCEL_MEDIA_TYPE,
        headers={
            "Content-Disposition": f"attachment; filename={EXCEL_TEMPLATE_FILENAME}",
            "ETag": etag,
        },
    )
