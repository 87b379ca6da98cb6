"""Location router - FastAPI endpoints for meeting venues"""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import Location, User
from .schemas import LocationCreate, LocationResponse
from .service import LocationService

router = APIRouter(prefix="/locations", tags=["Locations"])


def get_location_service(db: Session = Depends(get_db)) -> LocationService:
    """Dependency injection for LocationService"""
    return LocationService(db)


def to_location_response(loc: Location) -> LocationResponse:
    return LocationResponse(
        id=loc.id,
        name=loc.name,
        address=loc.address,
        latitude=loc.latitude,
        longitude=loc.longitude,
        isApproved=loc.is_approved,
        submittedByUserId=loc.submitted_by_user_id,
        isStatic=bool(loc.is_static),
        approxDriveMinutes=loc.approx_drive_minutes,
    )


@router.get("", response_model=list[LocationResponse])
async def get_locations(
    include_pending: bool = Query(False, alias="includePending"),
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    """Get approved locations (administrators may include pending submissions)"""
    return [to_location_response(loc) for loc in service.get_locations(current_user, include_pending)]


@router.post("", response_model=LocationResponse)
async def add_location(
    data: LocationCreate,
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    """Submit a location for approval"""
    location = service.add_location(
        data.name, data.address, data.latitude, data.longitude, current_user.id
    )
    return to_location_response(location)


@router.post("/{location_id}/approve", response_model=LocationResponse)
async def approve_location(
    location_id: str,
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    return to_location_response(service.approve_location(location_id, current_user.id))


@router.delete("/{location_id}")
async def delete_location(
    location_id: str,
    current_user: User = Depends(get_current_user),
    service: LocationService = Depends(get_location_service),
):
    """Delete a location with its timeslots and meetings"""
    return service.delete_location(location_id, current_user)
