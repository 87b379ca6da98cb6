"""Meeting domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel

from ...models import MeetingStatus


class MeetingResponse(BaseModel):
    """Schema for meeting response"""

    id: str
    hostUserId: str
    attendeeUserId: str
    timeslotId: Optional[str] = None
    locationId: str
    startTime: datetime
    durationMinutes: int
    status: MeetingStatus
    cancelledByUserId: Optional[str] = None
    calendarFile: Optional[str] = None

    class Config:
        from_attributes = True
