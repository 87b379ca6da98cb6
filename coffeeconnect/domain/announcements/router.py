"""Announcement router - FastAPI endpoints for community notices"""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Announcement, User
from .schemas import AnnouncementCreate, AnnouncementResponse
from .service import AnnouncementService

router = APIRouter(prefix="/announcements", tags=["Announcements"])


def get_announcement_service(db: Session = Depends(get_db)) -> AnnouncementService:
    """Dependency injection for AnnouncementService"""
    return AnnouncementService(db)


def to_announcement_response(a: Announcement) -> AnnouncementResponse:
    return AnnouncementResponse(
        id=a.id,
        title=a.title,
        content=a.content,
        authorUserId=a.author_user_id,
        timestamp=a.timestamp,
    )


@router.get("", response_model=list[AnnouncementResponse])
async def get_announcements(
    limit: Optional[int] = Query(None, ge=1, le=100),
    current_user: User = Depends(get_current_user),
    service: AnnouncementService = Depends(get_announcement_service),
):
    return [to_announcement_response(a) for a in service.get_announcements(limit)]


@router.post("", response_model=AnnouncementResponse)
async def create_announcement(
    data: AnnouncementCreate,
    current_user: User = Depends(get_current_user),
    service: AnnouncementService = Depends(get_announcement_service),
):
    return to_announcement_response(
        service.create_announcement(data.title, data.content, current_user)
    )


@router.delete("/{announcement_id}")
async def delete_announcement(
    announcement_id: str,
    current_user: User = Depends(get_current_user),
    service: AnnouncementService = Depends(get_announcement_service),
):
    service.delete_announcement(announcement_id, current_user)
    return {"message": "Announcement deleted"}
