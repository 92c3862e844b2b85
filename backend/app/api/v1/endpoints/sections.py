"""Section endpoints, including per-section question management."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session, selectinload

from app.core.app_exceptions import raise_bad_request, raise_not_found
from app.core.dependencies import AdminUser, CurrentUser
from app.core.logging import get_logger
from app.db.session import get_db
from app.models.provider import InsuranceProvider
from app.models.question import Question
from app.models.section import Section
from app.schemas.common import ApiResponse
from app.schemas.question import QuestionCreate, QuestionResponse
from app.schemas.section import (
    ReorderQuestionsRequest,
    SectionCreate,
    SectionResponse,
    SectionUpdate,
)
from app.services.importer.ordering import get_max_order

logger = get_logger(__name__)

router = APIRouter()


def get_section_or_404(db: Session, section_id: UUID) -> Section:
    section = db.get(Section, section_id)
    if not section:
        raise_not_found("Section")
    return section


# ============================================================================
# Sections CRUD
# ============================================================================


@router.get(
    "",
    response_model=ApiResponse[list[SectionResponse]],
    summary="List sections",
    description="Sections ordered by display order, each with its questions.",
)
async def list_sections(
    current_user: CurrentUser,
    insurance_provider_id: str | None = Query(default=None, alias="insuranceProviderId"),
    db: Session = Depends(get_db),
) -> ApiResponse[list[SectionResponse]]:
    query = db.query(Section).options(selectinload(Section.questions))
    if insurance_provider_id:
        query = query.filter(Section.insurance_provider_id == insurance_provider_id)
    sections = query.order_by(Section.order, Section.created_at).all()
    return ApiResponse(data=[SectionResponse.model_validate(s) for s in sections])


@router.get(
    "/{section_id}",
    response_model=ApiResponse[SectionResponse],
    summary="Get section",
)
async def get_section(
    section_id: UUID,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[SectionResponse]:
    section = get_section_or_404(db, section_id)
    return ApiResponse(data=SectionResponse.model_validate(section))


@router.post(
    "",
    response_model=ApiResponse[SectionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create section",
)
async def create_section(
    request: SectionCreate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[SectionResponse]:
    if not db.get(InsuranceProvider, request.insurance_provider_id):
        raise_bad_request("INVALID_PROVIDER", "Invalid insurance provider")

    section = Section(**request.model_dump())
    db.add(section)
    db.commit()
    db.refresh(section)

    return ApiResponse(
        message="Section created successfully",
        data=SectionResponse.model_validate(section),
    )


@router.put(
    "/{section_id}",
    response_model=ApiResponse[SectionResponse],
    summary="Update section",
)
async def update_section(
    section_id: UUID,
    request: SectionUpdate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[SectionResponse]:
    section = get_section_or_404(db, section_id)

    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(section, field, value)
    db.commit()
    db.refresh(section)

    return ApiResponse(
        message="Section updated successfully",
        data=SectionResponse.model_validate(section),
    )


@router.delete(
    "/{section_id}",
    response_model=ApiResponse[None],
    summary="Delete section",
    description="Deletes the section together with its questions and responses.",
)
async def delete_section(
    section_id: UUID,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[None]:
    section = get_section_or_404(db, section_id)
    db.delete(section)
    db.commit()
    return ApiResponse(message="Section deleted successfully")


# ============================================================================
# Questions within a section
# ============================================================================


@router.get(
    "/{section_id}/questions",
    response_model=ApiResponse[list[QuestionResponse]],
    summary="List section questions",
)
async def list_section_questions(
    section_id: UUID,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[list[QuestionResponse]]:
    get_section_or_404(db, section_id)
    questions = (
        db.query(Question)
        .filter(Question.section_id == section_id)
        .order_by(Question.order)
        .all()
    )
    return ApiResponse(data=[QuestionResponse.model_validate(q) for q in questions])


@router.post(
    "/{section_id}/questions",
    response_model=ApiResponse[QuestionResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create question",
    description="Add one question. Without an explicit order it goes after the last question.",
)
async def create_section_question(
    section_id: UUID,
    request: QuestionCreate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[QuestionResponse]:
    get_section_or_404(db, section_id)

    order = request.order if request.order is not None else get_max_order(db, section_id) + 1
    question = Question(
        section_id=section_id,
        type=request.type.value,
        label=request.label.strip(),
        placeholder=request.placeholder,
        required=request.required,
        options=[o.model_dump() for o in request.options] if request.options else None,
        order=order,
    )
    db.add(question)
    db.commit()
    db.refresh(question)

    return ApiResponse(
        message="Question created successfully",
        data=QuestionResponse.model_validate(question),
    )


@router.put(
    "/{section_id}/questions/reorder",
    response_model=ApiResponse[None],
    summary="Reorder questions",
    description="Each listed question gets its list position as order. Ids outside the section are ignored.",
)
async def reorder_section_questions(
    section_id: UUID,
    request: ReorderQuestionsRequest,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[None]:
    get_section_or_404(db, section_id)

    questions = {
        q.id: q
        for q in db.query(Question).filter(
            Question.section_id == section_id,
            Question.id.in_(request.question_ids),
        )
    }
    for position, question_id in enumerate(request.question_ids):
        question = questions.get(question_id)
        if question is not None:
            question.order = position
    db.commit()

    logger.info(
        "Questions reordered",
        extra={"section_id": str(section_id), "count": len(questions)},
    )
    return ApiResponse(message="Questions reordered successfully")
