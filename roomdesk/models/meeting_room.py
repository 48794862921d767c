"""Meeting room models with operating-hours validation."""

import re
from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ValidationInfo, field_validator

TIME_PATTERN = re.compile(r"^([01]\d|2[0-3]):[0-5]\d$")
MIN_SLOT_INTERVAL_MINUTES = 5


def _check_time(value: Optional[str], field: str) -> Optional[str]:
    if value is not None and not TIME_PATTERN.match(value):
        raise ValueError(f"{field} must be in HH:mm format")
    return value


def _check_name(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    value = value.strip()
    if len(value) < 2:
        raise ValueError("name must be at least 2 characters long")
    return value


def _check_interval(value: Optional[int]) -> Optional[int]:
    if value is not None and value < MIN_SLOT_INTERVAL_MINUTES:
        raise ValueError(
            f"slot_interval_minutes must be at least {MIN_SLOT_INTERVAL_MINUTES} minutes"
        )
    return value


class MeetingRoom(BaseModel):
    """A stored meeting room and its operating hours."""

    id: int
    name: str
    open_time: str
    close_time: str
    slot_interval_minutes: int
    created_at: Optional[datetime] = None


class MeetingRoomCreate(BaseModel):
    """Payload to create a meeting room. All fields are required."""

    name: str
    open_time: str
    close_time: str
    slot_interval_minutes: int

    @field_validator("name")
    @classmethod
    def name_length(cls, v: str) -> str:
        return _check_name(v)

    @field_validator("open_time", "close_time")
    @classmethod
    def time_format(cls, v: str, info: ValidationInfo) -> str:
        return _check_time(v, info.field_name)

    @field_validator("slot_interval_minutes")
    @classmethod
    def interval_minimum(cls, v: int) -> int:
        return _check_interval(v)


class MeetingRoomUpdate(BaseModel):
    """Partial update. Absent fields keep their stored value."""

    name: Optional[str] = None
    open_time: Optional[str] = None
    close_time: Optional[str] = None
    slot_interval_minutes: Optional[int] = None

    @field_validator("name")
    @classmethod
    def name_length(cls, v: Optional[str]) -> Optional[str]:
        return _check_name(v)

    @field_validator("open_time", "close_time")
    @classmethod
    def time_format(cls, v: Optional[str], info: ValidationInfo) -> Optional[str]:
        return _check_time(v, info.field_name)

    @field_validator("slot_interval_minutes")
    @classmethod
    def interval_minimum(cls, v: Optional[int]) -> Optional[int]:
        return _check_interval(v)
