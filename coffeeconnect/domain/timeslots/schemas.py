"""Timeslot domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, field_validator

from ...models import ALLOWED_DURATIONS


class TimeslotCreate(BaseModel):
    """Schema for posting availability"""

    startTime: datetime
    durationMinutes: int
    locationId: str
    repeatWeekly: bool = False

    @field_validator("durationMinutes")
    @classmethod
    def validate_duration(cls, v):
        if v not in ALLOWED_DURATIONS:
            raise ValueError(f"Duration must be one of {sorted(ALLOWED_DURATIONS)} minutes")
        return v


class TimeslotResponse(BaseModel):
    """Schema for timeslot response"""

    id: str
    hostUserId: str
    startTime: datetime
    durationMinutes: int
    locationId: str
    isBooked: bool
    bookedByUserId: Optional[str] = None
    repeatWeekly: bool

    class Config:
        from_attributes = True
