"""Dashboard statistics endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy import distinct, func
from sqlalchemy.orm import Session

from app.core.app_exceptions import raise_bad_request
from app.core.dependencies import AdminUser, require_roles
from app.db.session import get_db
from app.models.form_response import FormResponse, ResponseStatus
from app.models.provider import InsuranceProvider
from app.models.user import User, UserRole
from app.schemas.common import ApiResponse
from app.schemas.stats import AdminStats, AgentStats

router = APIRouter()


@router.get(
    "/admin",
    response_model=ApiResponse[AdminStats],
    status_code=status.HTTP_200_OK,
    summary="Admin dashboard stats",
)
async def get_admin_stats(
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[AdminStats]:
    """System-wide counts."""
    total_users = db.query(func.count(User.id)).filter(User.role == UserRole.USER.value).scalar()
    total_agents = db.query(func.count(User.id)).filter(User.role == UserRole.AGENT.value).scalar()
    total_providers = (
        db.query(func.count(InsuranceProvider.id))
        .filter(InsuranceProvider.is_active.is_(True))
        .scalar()
    )
    total_responses = db.query(func.count(FormResponse.id)).scalar()
    submitted = (
        db.query(func.count(FormResponse.id))
        .filter(FormResponse.status == ResponseStatus.SUBMITTED.value)
        .scalar()
    )
    pending = (
        db.query(func.count(FormResponse.id))
        .filter(FormResponse.status == ResponseStatus.DRAFT.value)
        .scalar()
    )

    return ApiResponse(
        data=AdminStats(
            total_users=total_users or 0,
            total_agents=total_agents or 0,
            total_providers=total_providers or 0,
            total_responses=total_responses or 0,
            submitted_responses=submitted or 0,
            pending_responses=pending or 0,
        )
    )


@router.get(
    "/agent",
    response_model=ApiResponse[AgentStats],
    status_code=status.HTTP_200_OK,
    summary="Agent dashboard stats",
)
async def get_agent_stats(
    current_user: User = Depends(require_roles(UserRole.AGENT)),
    db: Session = Depends(get_db),
) -> ApiResponse[AgentStats]:
    """Counts for the agent's own insurance provider."""
    provider_id = current_user.insurance_provider_id
    if not provider_id:
        raise_bad_request("AGENT_WITHOUT_PROVIDER", "Agent not assigned to any insurance provider")

    scoped = db.query(FormResponse).filter(FormResponse.insurance_provider_id == provider_id)
    total_responses = scoped.with_entities(func.count(FormResponse.id)).scalar()
    submitted = (
        scoped.filter(FormResponse.status == ResponseStatus.SUBMITTED.value)
        .with_entities(func.count(FormResponse.id))
        .scalar()
    )
    pending = (
        scoped.filter(FormResponse.status == ResponseStatus.DRAFT.value)
        .with_entities(func.count(FormResponse.id))
        .scalar()
    )
    total_users = scoped.with_entities(func.count(distinct(FormResponse.user_id))).scalar()

    return ApiResponse(
        data=AgentStats(
            total_responses=total_responses or 0,
            submitted_responses=submitted or 0,
            pending_responses=pending or 0,
            total_users=total_users or 0,
        )
    )
