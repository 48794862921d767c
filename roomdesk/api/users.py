"""User endpoints: admin user creation and the caller's own bookings."""

from fastapi import APIRouter, Depends, status
import structlog

from roomdesk.api.dependencies import get_current_user, require_admin
from roomdesk.models.auth import CreateUserRequest, MessageResponse
from roomdesk.models.user import AuthenticatedUser
from roomdesk.services.auth_service import AuthService
from roomdesk.services.booking_service import BookingService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/user", tags=["Users"])


@router.get("/booking")
async def list_my_bookings(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> dict:
    """List the authenticated user's bookings with room names."""
    service = BookingService()
    bookings = await service.list_user_bookings(current_user.id)
    return {"status": "success", "data": bookings}


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_user(
    request: CreateUserRequest,
    admin: AuthenticatedUser = Depends(require_admin),
) -> MessageResponse:
    """Create a user with an explicit role (admin only).

    Raises:
        422: If the email is already registered or a field is invalid
    """
    auth_service = AuthService()
    user = await auth_service.register(
        first_name=request.first_name,
        last_name=request.last_name,
        email=request.email,
        password=request.password,
        role=request.role,
    )

    logger.info(
        "admin_created_user",
        admin_id=admin.id,
        new_user_id=user.id,
        role=user.role.value,
    )
    return MessageResponse(message="User created successfully")
