"""Operating-hours window checks for meeting rooms.

Times are ``HH:mm`` strings compared as minutes since midnight. An update may
change either end of the window; the missing end is taken from the stored
room before the comparison.
"""

from typing import Optional, Tuple

from roomdesk.models.meeting_room import MeetingRoom
from roomdesk.services.errors import ValidationFault

WINDOW_ERROR_FIELD = "open_time"
WINDOW_ERROR_MESSAGE = "open_time must be lower than close_time"


def time_to_minutes(value: str) -> int:
    """Convert ``HH:mm`` into minutes since midnight."""
    hours, minutes = value.split(":")
    return int(hours) * 60 + int(minutes)


def resolve_window(
    open_time: Optional[str],
    close_time: Optional[str],
    existing: Optional[MeetingRoom] = None,
) -> Tuple[str, str]:
    """Merge a (possibly partial) update over the stored window.

    Args:
        open_time: New opening time, or None to keep the stored one
        close_time: New closing time, or None to keep the stored one
        existing: Persisted window; required when either value is None

    Returns:
        The effective (open_time, close_time) pair

    Raises:
        ValueError: If a value is missing and there is nothing to merge with
    """
    if open_time is None or close_time is None:
        if existing is None:
            raise ValueError("open_time and close_time are both required without an existing window")
    effective_open = open_time if open_time is not None else existing.open_time
    effective_close = close_time if close_time is not None else existing.close_time
    return effective_open, effective_close


def validate_window(
    open_time: Optional[str],
    close_time: Optional[str],
    existing: Optional[MeetingRoom] = None,
) -> Tuple[str, str]:
    """Resolve the effective window and require opening before closing.

    Returns:
        The effective (open_time, close_time) pair

    Raises:
        ValidationFault: With an ``open_time`` field error when the room
            would open at or after it closes
    """
    effective_open, effective_close = resolve_window(open_time, close_time, existing)
    if time_to_minutes(effective_open) >= time_to_minutes(effective_close):
        raise ValidationFault.for_field(WINDOW_ERROR_FIELD, WINDOW_ERROR_MESSAGE)
    return effective_open, effective_close
