"""Meeting room API endpoints."""

from fastapi import APIRouter, Depends, Path, status
import structlog

from roomdesk.api.dependencies import get_current_user, require_admin
from roomdesk.models.auth import MessageResponse
from roomdesk.models.meeting_room import MeetingRoomCreate, MeetingRoomUpdate
from roomdesk.models.user import AuthenticatedUser
from roomdesk.services.meeting_room_service import MeetingRoomService

logger = structlog.get_logger(__name__)

router = APIRouter(prefix="/meeting-room", tags=["Meeting rooms"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meeting_room(
    request: MeetingRoomCreate,
    admin: AuthenticatedUser = Depends(require_admin),
) -> MessageResponse:
    """Create a meeting room (admin only).

    Raises:
        422: If open_time is not before close_time, the name is taken,
            or a field is invalid
    """
    service = MeetingRoomService()
    await service.create_room(
        name=request.name,
        open_time=request.open_time,
        close_time=request.close_time,
        slot_interval_minutes=request.slot_interval_minutes,
    )
    return MessageResponse(message="Meeting room created successfully")


@router.get("")
async def list_meeting_rooms(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> dict:
    """List meeting rooms, newest first."""
    service = MeetingRoomService()
    rooms = await service.list_rooms()
    return {"status": "success", "data": rooms}


@router.put("/{room_id}")
async def update_meeting_room(
    request: MeetingRoomUpdate,
    room_id: int = Path(..., ge=1),
    admin: AuthenticatedUser = Depends(require_admin),
) -> MessageResponse:
    """Update a meeting room (admin only).

    Either end of the operating window may be omitted; the stored value is
    used in its place when checking open_time < close_time.

    Raises:
        404: If the room does not exist
        422: If the merged window is empty or a field is invalid
    """
    service = MeetingRoomService()
    await service.update_room(
        room_id,
        name=request.name,
        open_time=request.open_time,
        close_time=request.close_time,
        slot_interval_minutes=request.slot_interval_minutes,
    )
    return MessageResponse(message="Meeting room updated successfully")


@router.delete("/{room_id}")
async def delete_meeting_room(
    room_id: int = Path(..., ge=1),
    admin: AuthenticatedUser = Depends(require_admin),
) -> MessageResponse:
    """Delete a meeting room (admin only).

    Raises:
        404: If the room does not exist
    """
    service = MeetingRoomService()
    await service.delete_room(room_id)
    logger.info("admin_deleted_meeting_room", admin_id=admin.id, room_id=room_id)
    return MessageResponse(message="Meeting room deleted successfully")
