"""Location domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, Field


class LocationCreate(BaseModel):
    """Schema for submitting a new location"""

    name: str = Field(..., min_length=1, max_length=255)
    address: str = Field(..., min_length=1, max_length=500)
    latitude: float = Field(..., ge=-90, le=90)
    longitude: float = Field(..., ge=-180, le=180)


class LocationResponse(BaseModel):
    """Schema for location response"""

    id: str
    name: str
    address: str
    latitude: float
    longitude: float
    isApproved: bool
    submittedByUserId: Optional[str] = None
    isStatic: bool = False
    approxDriveMinutes: Optional[int] = None

    class Config:
        from_attributes = True
