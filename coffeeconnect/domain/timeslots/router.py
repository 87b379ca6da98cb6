"""Timeslot router - FastAPI endpoints for availability windows"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Timeslot, User
from ..meetings.router import to_meeting_response
from ..meetings.schemas import MeetingResponse
from .schemas import TimeslotCreate, TimeslotResponse
from .service import TimeslotService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/timeslots", tags=["Timeslots"])


def get_timeslot_service(db: Session = Depends(get_db)) -> TimeslotService:
    """Dependency injection for TimeslotService"""
    return TimeslotService(db)


def to_timeslot_response(t: Timeslot) -> TimeslotResponse:
    return TimeslotResponse(
        id=t.id,
        hostUserId=t.host_user_id,
        startTime=t.start_time,
        durationMinutes=t.duration_minutes,
        locationId=t.location_id,
        isBooked=t.is_booked,
        bookedByUserId=t.booked_by_user_id,
        repeatWeekly=t.repeat_weekly,
    )


@router.post("", response_model=list[TimeslotResponse])
async def create_timeslot(
    data: TimeslotCreate,
    current_user: User = Depends(get_current_user),
    service: TimeslotService = Depends(get_timeslot_service),
):
    """Post availability; weekly repeats create the extra occurrences too"""
    created = service.create_timeslot(
        current_user.id, data.startTime, data.durationMinutes, data.locationId, data.repeatWeekly
    )
    return [to_timeslot_response(t) for t in created]


@router.get("/open", response_model=list[TimeslotResponse])
async def get_open_timeslots(
    location_id: Optional[str] = Query(None, alias="locationId"),
    current_user: User = Depends(get_current_user),
    service: TimeslotService = Depends(get_timeslot_service),
):
    """Get upcoming unbooked timeslots"""
    return [to_timeslot_response(t) for t in service.get_open_timeslots(location_id)]


@router.get("/mine", response_model=list[TimeslotResponse])
async def get_my_timeslots(
    current_user: User = Depends(get_current_user),
    service: TimeslotService = Depends(get_timeslot_service),
):
    """Get every timeslot hosted by the current user"""
    return [to_timeslot_response(t) for t in service.get_timeslots_for_host(current_user.id)]


@router.get("/{timeslot_id}", response_model=TimeslotResponse)
async def get_timeslot(
    timeslot_id: str,
    current_user: User = Depends(get_current_user),
    service: TimeslotService = Depends(get_timeslot_service),
):
    return to_timeslot_response(service.get_timeslot(timeslot_id))


@router.post("/{timeslot_id}/accept", response_model=MeetingResponse)
def accept_timeslot(
    timeslot_id: str,
    current_user: User = Depends(get_current_user),
    service: TimeslotService = Depends(get_timeslot_service),
):
    """Book a timeslot as the current user (sync: SMS sends run in the threadpool)"""
    meeting = service.accept_timeslot(timeslot_id, current_user.id)
    return to_meeting_response(meeting)


@router.delete("/{timeslot_id}")
def delete_timeslot(
    timeslot_id: str,
    current_user: User = Depends(get_current_user),
    service: TimeslotService = Depends(get_timeslot_service),
):
    """Delete a timeslot (booked ones: administrators only, cancels the meeting and sends SMS)"""
    service.delete_timeslot(timeslot_id, current_user.id, current_user.role)
    return {"message": "Timeslot deleted"}
