"""Authentication endpoints."""

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.core.app_exceptions import AppError, raise_bad_request
from app.core.dependencies import CurrentUser
from app.core.logging import get_logger
from app.core.security import create_access_token, hash_password, verify_password
from app.db.session import get_db
from app.models.provider import InsuranceProvider
from app.models.user import User, UserRole
from app.schemas.auth import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from app.schemas.common import ApiResponse

logger = get_logger(__name__)

router = APIRouter()


def _auth_response(user: User) -> AuthResponse:
    token = create_access_token(
        user_id=str(user.id),
        role=user.role,
        insurance_provider_id=user.insurance_provider_id,
    )
    return AuthResponse(user=UserResponse.model_validate(user), token=token)


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account. Agents must name the insurance provider they work for.",
)
async def register(
    request: RegisterRequest,
    db: Session = Depends(get_db),
) -> ApiResponse[AuthResponse]:
    """Register a new user."""
    if request.role == UserRole.AGENT and not request.insurance_provider_id:
        raise_bad_request("PROVIDER_REQUIRED", "Insurance provider is required for agents")

    if db.query(User).filter(User.email == request.email).first():
        raise AppError(
            status_code=status.HTTP_409_CONFLICT,
            code="EMAIL_ALREADY_REGISTERED",
            message="Email already registered",
        )

    if request.insurance_provider_id and not db.get(
        InsuranceProvider, request.insurance_provider_id
    ):
        raise_bad_request("INVALID_PROVIDER", "Invalid insurance provider")

    user = User(
        name=request.name,
        email=request.email,
        phone=request.phone,
        password_hash=hash_password(request.password),
        role=request.role.value,
        insurance_provider_id=request.insurance_provider_id,
        is_active=True,
    )
    db.add(user)
    db.commit()
    db.refresh(user)

    logger.info("User registered", extra={"user_id": str(user.id), "role": user.role})
    return ApiResponse(data=_auth_response(user))


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Login",
    description="Authenticate with email, password and the role being signed into.",
)
async def login(
    request: LoginRequest,
    db: Session = Depends(get_db),
) -> ApiResponse[AuthResponse]:
    """Login with email, password and role."""
    user = (
        db.query(User)
        .filter(User.email == request.email, User.role == request.role.value)
        .first()
    )
    if not user or not verify_password(request.password, user.password_hash):
        raise AppError(
            status_code=status.HTTP_401_UNAUTHORIZED,
            code="INVALID_CREDENTIALS",
            message="Invalid credentials or role",
        )

    if not user.is_active:
        raise AppError(
            status_code=status.HTTP_403_FORBIDDEN,
            code="ACCOUNT_INACTIVE",
            message="User account is inactive",
        )

    logger.info("User logged in", extra={"user_id": str(user.id), "role": user.role})
    return ApiResponse(data=_auth_response(user))


@router.get(
    "/profile",
    response_model=ApiResponse[UserResponse],
    summary="Current user",
)
async def get_profile(current_user: CurrentUser) -> ApiResponse[UserResponse]:
    return ApiResponse(data=UserResponse.model_validate(current_user))
