"""Booking API endpoints."""

from fastapi import APIRouter, Depends, Path, status

from roomdesk.api.dependencies import get_current_user
from roomdesk.models.auth import MessageResponse
from roomdesk.models.booking import BookingCreate, BookingUpdate
from roomdesk.models.user import AuthenticatedUser
from roomdesk.services.booking_service import BookingService

router = APIRouter(prefix="/booking", tags=["Bookings"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_booking(
    request: BookingCreate,
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> MessageResponse:
    """Book a meeting room for the authenticated user.

    Overlapping bookings are accepted.
    """
    service = BookingService()
    await service.create_booking(
        user_id=current_user.id,
        name=request.name,
        meeting_room_id=request.meeting_room_id,
        start_time=request.start_time,
        end_time=request.end_time,
        purpose=request.purpose,
    )
    return MessageResponse(message="Booking created successfully")


@router.get("")
async def list_bookings(
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> dict:
    """List every booking's room and time range."""
    service = BookingService()
    bookings = await service.list_bookings()
    return {"status": "success", "data": bookings}


@router.put("/{booking_id}")
async def update_booking(
    request: BookingUpdate,
    booking_id: int = Path(..., ge=1),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> MessageResponse:
    """Update one of the authenticated user's bookings."""
    service = BookingService()
    await service.update_booking(
        current_user.id,
        booking_id,
        name=request.name,
        meeting_room_id=request.meeting_room_id,
        start_time=request.start_time,
        end_time=request.end_time,
        purpose=request.purpose,
    )
    return MessageResponse(message="Booking updated successfully")


@router.delete("/{booking_id}")
async def delete_booking(
    booking_id: int = Path(..., ge=1),
    current_user: AuthenticatedUser = Depends(get_current_user),
) -> MessageResponse:
    """Delete one of the authenticated user's bookings."""
    service = BookingService()
    await service.delete_booking(current_user.id, booking_id)
    return MessageResponse(message="Booking deleted successfully")
