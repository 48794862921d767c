"""Booking models."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ValidationInfo, field_validator


def _check_purpose(value: Optional[str]) -> Optional[str]:
    if value is not None and len(value.strip()) < 3:
        raise ValueError("purpose must be at least 3 characters long")
    return value


def _check_end_after_start(
    end_time: Optional[datetime], info: ValidationInfo
) -> Optional[datetime]:
    start_time = info.data.get("start_time")
    if end_time is not None and start_time is not None and end_time <= start_time:
        raise ValueError("end_time must be greater than start_time")
    return end_time


class Booking(BaseModel):
    """A stored booking of a meeting room by a user."""

    id: int
    name: str
    purpose: str
    user_id: int
    meeting_room_id: int
    start_time: datetime
    end_time: datetime
    created_at: Optional[datetime] = None


class BookingCreate(BaseModel):
    """Payload to book a meeting room.

    Bookings are not checked for overlap with existing bookings.
    """

    name: str = Field(..., min_length=1)
    meeting_room_id: int = Field(..., ge=1)
    start_time: datetime
    end_time: datetime
    purpose: str

    @field_validator("end_time")
    @classmethod
    def end_after_start(cls, v: datetime, info: ValidationInfo) -> datetime:
        return _check_end_after_start(v, info)

    @field_validator("purpose")
    @classmethod
    def purpose_length(cls, v: str) -> str:
        return _check_purpose(v)


class BookingUpdate(BaseModel):
    """Partial booking update. Absent fields keep their stored value.

    end_time is only compared with start_time when both are supplied.
    """

    name: Optional[str] = Field(default=None, min_length=1)
    meeting_room_id: Optional[int] = Field(default=None, ge=1)
    start_time: Optional[datetime] = None
    end_time: Optional[datetime] = None
    purpose: Optional[str] = None

    @field_validator("end_time")
    @classmethod
    def end_after_start(
        cls, v: Optional[datetime], info: ValidationInfo
    ) -> Optional[datetime]:
        return _check_end_after_start(v, info)

    @field_validator("purpose")
    @classmethod
    def purpose_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_purpose(v)
