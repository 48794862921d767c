"""Authentication API endpoints."""

from fastapi import APIRouter, Depends, status
import structlog

from roomdesk.api.dependencies import get_current_user
from roomdesk.models.auth import (
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RefreshRequest,
    RefreshResponse,
    RegisterRequest,
)
from roomdesk.models.user import AuthenticatedUser
from roomdesk.services.auth_service import AuthService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post("/register", status_code=status.HTTP_201_CREATED)
async def register(request: RegisterRequest) -> MessageResponse:
    """Self-service registration. New accounts always get the USER role.

    Raises:
        422: If the email is already registered or a field is invalid
        500: If hashing or the database fails
    """
    auth_service = AuthService()
    await auth_service.register(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
    )
    return MessageResponse(message="User registered successfully")


@router.post("/login")
async def login(request: LoginRequest) -> LoginResponse:
    """Login with email and password.

    A successful login replaces the user's stored refresh token, so any
    refresh token from an earlier login stops working.

    Raises:
        400: If the email is unknown or the password is wrong (same message)
    """
    auth_service = AuthService()
    pair = await auth_service.login(request.email, request.password)
    return LoginResponse(
        access_token=pair.access_token,
        refresh_token=pair.refresh_token,
    )


@router.post("/refresh")
async def refresh(request: RefreshRequest) -> RefreshResponse:
    """Exchange a refresh token for a new access token.

    Raises:
        401: If the refresh token is invalid, expired or revoked
    """
    auth_service = AuthService()
    access_token = await auth_service.refresh(request.refresh_token)
    return RefreshResponse(access_token=access_token)


@router.get("/me")
async def get_me(current_user: AuthenticatedUser = Depends(get_current_user)) -> dict:
    """Return the authenticated user's identity."""
    return {"status": "success", "data": current_user.model_dump(mode="json")}
