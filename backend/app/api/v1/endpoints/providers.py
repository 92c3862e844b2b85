"""Insurance provider endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.core.app_exceptions import AppError, raise_not_found
from app.core.dependencies import AdminUser, CurrentUser
from app.db.session import get_db
from app.models.provider import InsuranceProvider
from app.schemas.common import ApiResponse
from app.schemas.provider import ProviderCreate, ProviderResponse, ProviderUpdate

router = APIRouter()


def get_provider_or_404(db: Session, provider_id: str) -> InsuranceProvider:
    provider = db.get(InsuranceProvider, provider_id)
    if not provider:
        raise_not_found("Insurance provider")
    return provider


@router.get(
    "",
    response_model=ApiResponse[list[ProviderResponse]],
    summary="List insurance providers",
)
async def list_providers(
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[list[ProviderResponse]]:
    providers = db.query(InsuranceProvider).order_by(InsuranceProvider.name).all()
    return ApiResponse(data=[ProviderResponse.model_validate(p) for p in providers])


@router.get(
    "/{provider_id}",
    response_model=ApiResponse[ProviderResponse],
    summary="Get insurance provider",
)
async def get_provider(
    provider_id: str,
    current_user: CurrentUser,
    db: Session = Depends(get_db),
) -> ApiResponse[ProviderResponse]:
    provider = get_provider_or_404(db, provider_id)
    return ApiResponse(data=ProviderResponse.model_validate(provider))


@router.post(
    "",
    response_model=ApiResponse[ProviderResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create insurance provider",
)
async def create_provider(
    request: ProviderCreate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[ProviderResponse]:
    """Create a provider under an admin-chosen id."""
    if db.get(InsuranceProvider, request.id):
        raise AppError(
            status_code=status.HTTP_409_CONFLICT,
            code="PROVIDER_ID_EXISTS",
            message="Provider ID already exists",
        )

    provider = InsuranceProvider(**request.model_dump())
    try:
        db.add(provider)
        db.commit()
        db.refresh(provider)
    except IntegrityError as e:
        db.rollback()
        raise AppError(
            status_code=status.HTTP_409_CONFLICT,
            code="PROVIDER_ID_EXISTS",
            message="Provider ID already exists",
        ) from e

    return ApiResponse(
        message="Insurance provider created successfully",
        data=ProviderResponse.model_validate(provider),
    )


@router.put(
    "/{provider_id}",
    response_model=ApiResponse[ProviderResponse],
    summary="Update insurance provider",
)
async def update_provider(
    provider_id: str,
    request: ProviderUpdate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[ProviderResponse]:
    provider = get_provider_or_404(db, provider_id)

    for field, value in request.model_dump(exclude_unset=True).items():
        setattr(provider, field, value)
    db.commit()
    db.refresh(provider)

    return ApiResponse(
        message="Insurance provider updated successfully",
        data=ProviderResponse.model_validate(provider),
    )


@router.delete(
    "/{provider_id}",
    response_model=ApiResponse[None],
    summary="Delete insurance provider",
    description="Deletes the provider with its sections, questions and responses.",
)
async def delete_provider(
    provider_id: str,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[None]:
    provider = get_provider_or_404(db, provider_id)
    db.delete(provider)
    db.commit()
    return ApiResponse(message="Insurance provider deleted successfully")
