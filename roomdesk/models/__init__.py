"""Models package exports."""

from roomdesk.models.booking import Booking, BookingCreate, BookingUpdate
from roomdesk.models.meeting_room import MeetingRoom, MeetingRoomCreate, MeetingRoomUpdate
from roomdesk.models.user import AuthenticatedUser, Role, User

__all__ = [
    "AuthenticatedUser",
    "Booking",
    "BookingCreate",
    "BookingUpdate",
    "MeetingRoom",
    "MeetingRoomCreate",
    "MeetingRoomUpdate",
    "Role",
    "User",
]
