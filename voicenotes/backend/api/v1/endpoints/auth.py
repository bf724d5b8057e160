"""
Auth API Endpoints.

Registration, login, password reset acknowledgement, and the current user.
"""

from fastapi import APIRouter

from voicenotes.backend.core.config import get_app_config
from voicenotes.backend.core.dependencies import CurrentUser, DbSession, RequestId
from voicenotes.backend.core.exceptions import ValidationError
from voicenotes.backend.schemas.auth import (
    AuthResponse,
    LoginRequest,
    PasswordResetRequest,
    RegisterRequest,
    UserResponse,
)
from voicenotes.backend.schemas.base import ApiResponse, MessageResponse, ResponseMetadata
from voicenotes.backend.services.auth import AuthService

router = APIRouter()


@router.post(
    "/register",
    response_model=ApiResponse[AuthResponse],
    status_code=201,
    summary="Register",
    description="Create an account and return it with an access token.",
)
async def register(
    data: RegisterRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AuthResponse]:
    """Register a new user."""
    if not get_app_config().features.auth_registration_enabled:
        raise ValidationError("Registration is disabled")

    user, token = await AuthService(db).register(data)
    return ApiResponse(
        data=AuthResponse(user=UserResponse.model_validate(user), token=token),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/login",
    response_model=ApiResponse[AuthResponse],
    summary="Log in",
    description="Exchange email and password for an access token.",
)
async def login(
    data: LoginRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[AuthResponse]:
    """Log in with email and password."""
    user, token = await AuthService(db).login(data)
    return ApiResponse(
        data=AuthResponse(user=UserResponse.model_validate(user), token=token),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.post(
    "/request-password-reset",
    response_model=ApiResponse[MessageResponse],
    summary="Request password reset",
    description="Always answers the same way whether or not the account exists.",
)
async def request_password_reset(
    data: PasswordResetRequest,
    db: DbSession,
    request_id: RequestId,
) -> ApiResponse[MessageResponse]:
    """Acknowledge a password reset request."""
    message = await AuthService(db).request_password_reset(data.email)
    return ApiResponse(
        data=MessageResponse(message=message),
        metadata=ResponseMetadata(request_id=request_id),
    )


@router.get(
    "/me",
    response_model=ApiResponse[UserResponse],
    summary="Current user",
)
async def me(user: CurrentUser, request_id: RequestId) -> ApiResponse[UserResponse]:
    """Return the authenticated user."""
    return ApiResponse(
        data=UserResponse.model_validate(user),
        metadata=ResponseMetadata(request_id=request_id),
    )
