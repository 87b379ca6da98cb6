"""Location service - Submission, approval and removal of meeting venues"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ForbiddenError, NotFoundError, ValidationError
from ...models import Location, User
from ...shared import permissions
from ...shared.transaction import unit_of_work
from ...shared.validators import validate_coordinates
from ..scoring import ScoringEvent, ScoringPolicy, ScoringService
from ..users.service import require_user
from .repository import LocationRepository

logger = logging.getLogger(__name__)


class LocationService:
    """Service layer for location business logic"""

    def __init__(self, db: Session, policy: Optional[ScoringPolicy] = None):
        self.db = db
        self.repo = LocationRepository()
        self.scoring = ScoringService(db, policy)

    def get_location(self, location_id: str) -> Location:
        location = self.repo.get_location(self.db, location_id)
        if not location:
            raise NotFoundError(f"Location {location_id} not found")
        return location

    def get_locations(self, requester: Optional[User] = None, include_pending: bool = False) -> list[Location]:
        """Approved locations; administrators may also see pending submissions"""
        if include_pending and not (requester and permissions.is_administrator(requester.role)):
            raise ForbiddenError("Only administrators can view pending locations")
        return self.repo.get_locations(self.db, include_pending=include_pending)

    def add_location(
        self,
        name: str,
        address: str,
        latitude: float,
        longitude: float,
        submitter_id: str,
    ) -> Location:
        """Submit a location for approval; the submitter earns SUBMIT_LOCATION"""
        try:
            latitude, longitude = validate_coordinates(latitude, longitude)
        except ValueError as e:
            raise ValidationError(str(e)) from e

        with unit_of_work(self.db):
            require_user(self.db, submitter_id)
            location = self.repo.create_location(
                self.db,
                name=name,
                address=address,
                latitude=latitude,
                longitude=longitude,
                is_approved=False,
                submitted_by_user_id=submitter_id,
            )
            self.scoring.award(ScoringEvent.SUBMIT_LOCATION, submitter_id)

        logger.info(f"📍 Location {location.id} submitted by {submitter_id}")
        return location

    def approve_location(self, location_id: str, admin_id: str) -> Location:
        """Approve a submission; the original submitter earns APPROVE_LOCATION"""
        with unit_of_work(self.db):
            admin = require_user(self.db, admin_id)
            if not permissions.can_approve_location(admin.role):
                logger.warning(f"⚠️ User {admin_id} attempted to approve location {location_id}")
                raise ForbiddenError("Only administrators can approve locations")

            location = self.get_location(location_id)
            # Approving twice must not pay the submitter twice
            if not location.is_approved:
                self.repo.mark_approved(self.db, location)
                if location.submitted_by_user_id:
                    self.scoring.award(ScoringEvent.APPROVE_LOCATION, location.submitted_by_user_id)

        logger.info(f"✅ Location {location_id} approved by {admin_id}")
        return location

    def delete_location(self, location_id: str, requester: User) -> dict:
        """Remove a location together with its timeslots and meetings"""
        if not permissions.can_delete_location(requester.role):
            raise ForbiddenError("Only administrators can delete locations")

        with unit_of_work(self.db):
            location = self.get_location(location_id)
            deleted_meetings, deleted_timeslots = self.repo.delete_location(self.db, location)

        logger.info(
            f"🗑️ Location {location_id} deleted by {requester.id} "
            f"({deleted_timeslots} timeslots, {deleted_meetings} meetings)"
        )
        return {
            "message": "Location deleted",
            "deletedTimeslots": deleted_timeslots,
            "deletedMeetings": deleted_meetings,
        }
