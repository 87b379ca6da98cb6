"""Announcement domain schemas - Pydantic models for validation"""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field


class AnnouncementCreate(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    content: str = Field(..., min_length=1)


class AnnouncementResponse(BaseModel):
    id: str
    title: str
    content: str
    authorUserId: Optional[str] = None
    timestamp: datetime

    class Config:
        from_attributes = True
