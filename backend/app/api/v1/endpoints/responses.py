"""Form response endpoints with per-role data isolation.

Users only ever see their own responses, agents only the responses of their
insurance provider, admins everything.
"""

from datetime import datetime, timezone
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Query as OrmQuery
from sqlalchemy.orm import Session, joinedload

from app.core.app_exceptions import AppError, raise_bad_request, raise_not_found
from app.core.dependencies import CurrentUser
from app.core.logging import get_logger
from app.db.session import get_db
from app.models.form_response import FormResponse, ResponseStatus
from app.models.section import Section
from app.models.user import User, UserRole
from app.schemas.common import ApiResponse
from app.schemas.form_response import FormResponseResponse, SaveResponseRequest

logger = get_logger(__name__)

router = APIRouter()


def scoped_responses(db: Session, user: User) -> OrmQuery:
    """Responses the caller is allowed to see."""
    query = db.query(FormResponse).options(
        joinedload(FormResponse.user),
        joinedload(FormResponse.section),
        joinedload(FormResponse.insurance_provider),
    )
    role = UserRole(user.role)
    if role == UserRole.USER:
        return query.filter(FormResponse.user_id == user.id)
    if role == UserRole.AGENT:
        if not user.insurance_provider_id:
            raise AppError(
                status_code=status.HTTP_403_FORBIDDEN,
                code="AGENT_WITHOUT_PROVIDER",
                message="Agent not assigned to any insurance provider",
            )
        return query.filter(FormResponse.insurance_provider_id == user.insurance_provider_id)
    return query


@router.get(
    "",
    response_model=ApiResponse[list[FormResponseResponse]],
    summary="List responses",
    description="Responses visible to the caller, most recently updated first.",
)
async def list_responses(
    current_user: CurrentUser,
    insurance_provider_id: str | None = Query(default=None, alias="insuranceProviderId"),
    section_id: UUID | None = Query(default=None, alias="sectionId"),
    user_id: UUID | None = Query(default=None, alias="userId"),
    is_submitted: bool | None = Query(default=None, alias="isSubmitted"),
    response_status: ResponseStatus | None = Query(default=None, alias="status"),
    db: Session = Depends(get_db),
) -> ApiResponse[list[FormResponseResponse]]:
    query = scoped_responses(db, current_user)

    if insurance_provider_id:
        query = query.filter(FormResponse.insurance_provider_id == insurance_provider_id)
    if section_id:
        query = query.filter(FormResponse.section_id == section_id)
    # userId filter is an admin tool; others are already scoped
    if user_id and current_user.role == UserRole.ADMIN.value:
        query = query.filter(FormResponse.user_id == user_id)
    if is_submitted is not None:
        query = query.filter(FormResponse.is_submitted == is_submitted)
    if response_status:
        query = query.filter(FormResponse.status == response_status.value)

    responses = query.order_by(FormResponse.updated_at.desc()).all()
    return ApiResponse(data=[FormResponseResponse.model_validate(r) for r in responses])


@router.get(
    "/user/section/{section_id}",
    response_model=ApiResponse[FormResponseResponse],
    summary="Caller's response for a section",
    description="Returns data=null when the caller has not started this section.",
)
async def get_my_section_response(
    section_id: UUID,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[FormResponseResponse]:
    response = (
        db.query(FormResponse)
        .filter(FormResponse.user_id == current_user.id, FormResponse.section_id == section_id)
        .first()
    )
    if response is None:
        return ApiResponse(data=None)
    return ApiResponse(data=FormResponseResponse.model_validate(response))


@router.get(
    "/{response_id}",
    response_model=ApiResponse[FormResponseResponse],
    summary="Get response",
)
async def get_response(
    response_id: UUID,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[FormResponseResponse]:
    response = scoped_responses(db, current_user).filter(FormResponse.id == response_id).first()
    if response is None:
        raise_not_found("Response")
    return ApiResponse(data=FormResponseResponse.model_validate(response))


@router.post(
    "/save",
    response_model=ApiResponse[FormResponseResponse],
    summary="Save draft",
    description="Create or update the caller's draft for a section. Submitted responses are locked.",
)
async def save_response(
    request: SaveResponseRequest,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[FormResponseResponse]:
    section = (
        db.query(Section)
        .filter(
            Section.id == request.section_id,
            Section.insurance_provider_id == request.insurance_provider_id,
        )
        .first()
    )
    if section is None:
        raise_bad_request("INVALID_SECTION", "Invalid section for this insurance provider")

    response = (
        db.query(FormResponse)
        .filter(
            FormResponse.user_id == current_user.id,
            FormResponse.section_id == request.section_id,
        )
        .first()
    )
    if response is None:
        response = FormResponse(
            user_id=current_user.id,
            section_id=request.section_id,
            insurance_provider_id=request.insurance_provider_id,
            responses=request.responses,
            status=ResponseStatus.DRAFT.value,
            is_submitted=False,
        )
        db.add(response)
    elif response.is_submitted:
        raise_bad_request("RESPONSE_LOCKED", "Cannot edit submitted response")
    else:
        response.responses = request.responses
        response.updated_at = datetime.now(timezone.utc)

    db.commit()
    db.refresh(response)
    return ApiResponse(
        message="Response saved",
        data=FormResponseResponse.model_validate(response),
    )


@router.post(
    "/{response_id}/submit",
    response_model=ApiResponse[FormResponseResponse],
    summary="Submit response",
    description="Lock the caller's draft as SUBMITTED.",
)
async def submit_response(
    response_id: UUID,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[FormResponseResponse]:
    response = (
        db.query(FormResponse)
        .filter(
            FormResponse.id == response_id,
            FormResponse.user_id == current_user.id,
            FormResponse.is_submitted.is_(False),
        )
        .first()
    )
    if response is None:
        raise AppError(
            status_code=status.HTTP_404_NOT_FOUND,
            code="RESPONSE_NOT_FOUND",
            message="Response not found or already submitted",
        )

    now = datetime.now(timezone.utc)
    response.is_submitted = True
    response.status = ResponseStatus.SUBMITTED.value
    response.submitted_at = now
    response.updated_at = now
    db.commit()
    db.refresh(response)

    logger.info(
        "Response submitted",
        extra={"response_id": str(response.id), "user_id": str(current_user.id)},
    )
    return ApiResponse(
        message="Response submitted successfully",
        data=FormResponseResponse.model_validate(response),
    )
