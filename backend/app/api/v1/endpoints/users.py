"""Admin user management endpoints."""

from uuid import UUID

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from app.core.app_exceptions import AppError, raise_bad_request, raise_not_found
from app.core.dependencies import AdminUser
from app.core.logging import get_logger
from app.db.session import get_db
from app.models.provider import InsuranceProvider
from app.models.user import User, UserRole
from app.schemas.auth import UserResponse
from app.schemas.common import ApiResponse
from app.schemas.user import UserUpdate

logger = get_logger(__name__)

router = APIRouter()


def get_user_or_404(db: Session, user_id: UUID) -> User:
    user = db.get(User, user_id)
    if not user:
        raise_not_found("User")
    return user


@router.get(
    "",
    response_model=ApiResponse[list[UserResponse]],
    summary="List users",
)
async def list_users(
    current_user: AdminUser,
    role: UserRole | None = Query(default=None),
    db: Session = Depends(get_db),
) -> ApiResponse[list[UserResponse]]:
    query = db.query(User)
    if role:
        query = query.filter(User.role == role.value)
    users = query.order_by(User.created_at.desc()).all()
    return ApiResponse(data=[UserResponse.model_validate(u) for u in users])


@router.get(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Get user",
)
async def get_user(
    user_id: UUID,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[UserResponse]:
    return ApiResponse(data=UserResponse.model_validate(get_user_or_404(db, user_id)))


@router.put(
    "/{user_id}",
    response_model=ApiResponse[UserResponse],
    summary="Update user",
    description="Update profile fields, role or provider binding.",
)
async def update_user(
    user_id: UUID,
    request: UserUpdate,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[UserResponse]:
    user = get_user_or_404(db, user_id)
    update_data = request.model_dump(exclude_unset=True)

    if "email" in update_data and update_data["email"] != user.email:
        taken = db.query(User).filter(User.email == update_data["email"], User.id != user.id).first()
        if taken:
            raise AppError(
                status_code=status.HTTP_409_CONFLICT,
                code="EMAIL_ALREADY_REGISTERED",
                message="Email already registered",
            )

    provider_id = update_data.get("insurance_provider_id")
    if provider_id and not db.get(InsuranceProvider, provider_id):
        raise_bad_request("INVALID_PROVIDER", "Invalid insurance provider")

    if update_data.get("role") is not None:
        update_data["role"] = update_data["role"].value

    new_role = update_data.get("role") or user.role
    new_provider = update_data.get("insurance_provider_id", user.insurance_provider_id)
    if new_role == UserRole.AGENT.value and not new_provider:
        raise_bad_request("PROVIDER_REQUIRED", "Insurance provider is required for agents")

    for field, value in update_data.items():
        if value is None and field in ("name", "email", "role", "is_active"):
            continue
        setattr(user, field, value)
    db.commit()
    db.refresh(user)

    logger.info("User updated", extra={"user_id": str(user.id), "updated_by": str(current_user.id)})
    return ApiResponse(
        message="User updated successfully",
        data=UserResponse.model_validate(user),
    )


@router.delete(
    "/{user_id}",
    response_model=ApiResponse[None],
    summary="Delete user",
)
async def delete_user(
    user_id: UUID,
    current_user: AdminUser,
    db: Session = Depends(get_db),
) -> ApiResponse[None]:
    user = get_user_or_404(db, user_id)
    if user.id == current_user.id:
        raise_bad_request("CANNOT_DELETE_SELF", "You cannot delete your own account")
    db.delete(user)
    db.commit()
    return ApiResponse(message="User deleted successfully")
