"""Meeting router - FastAPI endpoints for meeting lifecycle"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Meeting, MeetingStatus, User
from .schemas import MeetingResponse
from .service import MeetingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/meetings", tags=["Meetings"])


def get_meeting_service(db: Session = Depends(get_db)) -> MeetingService:
    """Dependency injection for MeetingService"""
    return MeetingService(db)


def to_meeting_response(m: Meeting) -> MeetingResponse:
    return MeetingResponse(
        id=m.id,
        hostUserId=m.host_user_id,
        attendeeUserId=m.attendee_user_id,
        timeslotId=m.timeslot_id,
        locationId=m.location_id,
        startTime=m.start_time,
        durationMinutes=m.duration_minutes,
        status=m.status,
        cancelledByUserId=m.cancelled_by_user_id,
        calendarFile=m.calendar_file,
    )


@router.get("", response_model=list[MeetingResponse])
async def get_my_meetings(
    status: Optional[MeetingStatus] = Query(None),
    current_user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
):
    """Get meetings the current user hosts or attends"""
    return [to_meeting_response(m) for m in service.get_meetings_for_user(current_user.id, status)]


@router.post("/{meeting_id}/cancel", response_model=MeetingResponse)
def cancel_meeting(
    meeting_id: str,
    current_user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
):
    """Cancel a confirmed meeting and reopen its timeslot (sync: SMS sends run in the threadpool)"""
    return to_meeting_response(service.cancel_meeting(meeting_id, current_user.id))


@router.post("/{meeting_id}/complete", response_model=MeetingResponse)
async def complete_meeting(
    meeting_id: str,
    current_user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
):
    """Mark a confirmed meeting as held"""
    return to_meeting_response(service.complete_meeting(meeting_id, current_user.id))


@router.get("/{meeting_id}/calendar.ics")
async def download_calendar_file(
    meeting_id: str,
    current_user: User = Depends(get_current_user),
    service: MeetingService = Depends(get_meeting_service),
):
    """Download the calendar invite for a meeting"""
    content = service.get_calendar_file(meeting_id, current_user)
    return Response(
        content=content,
        media_type="text/calendar; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename=meeting-{meeting_id}.ics"},
    )
