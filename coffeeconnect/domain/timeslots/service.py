"""
Timeslot service - Posting, booking and removing availability windows.

Booking is the one place two rows change together: the timeslot flips
Open -> Booked through a conditional update and the Meeting row is inserted
in the same transaction, so either both exist afterwards or neither does.
"""

import logging
from datetime import datetime, timedelta
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ... import config
from ...exceptions import (
    ConflictError,
    ForbiddenError,
    InvalidStateError,
    InvalidTimeError,
    NotFoundError,
    SelfBookingError,
    ValidationError,
)
from ...models import ALLOWED_DURATIONS, Meeting, MeetingStatus, Timeslot, UserRole
from ...services.notification_service import NotificationDispatcher
from ...shared import permissions
from ...shared.transaction import unit_of_work
from ...shared.validators import to_local_naive
from ..locations.repository import LocationRepository
from ..meetings.repository import MeetingRepository
from ..meetings.service import MeetingService
from ..scoring import ScoringEvent, ScoringPolicy, ScoringService
from ..users.service import require_user
from .repository import TimeslotRepository

logger = logging.getLogger(__name__)


class TimeslotService:
    """Service layer for timeslot lifecycle"""

    def __init__(
        self,
        db: Session,
        notifier: Optional[NotificationDispatcher] = None,
        policy: Optional[ScoringPolicy] = None,
        recurrence_count: Optional[int] = None,
        clock: Callable[[], datetime] = datetime.now,
    ):
        self.db = db
        self.repo = TimeslotRepository()
        self.meetings = MeetingRepository()
        self.locations = LocationRepository()
        self.policy = policy
        self.scoring = ScoringService(db, policy)
        self.notifier = notifier or NotificationDispatcher(db)
        self.recurrence_count = (
            config.RECURRENCE_COUNT if recurrence_count is None else recurrence_count
        )
        self.clock = clock

    def get_timeslot(self, timeslot_id: str) -> Timeslot:
        timeslot = self.repo.get_timeslot(self.db, timeslot_id)
        if not timeslot:
            raise NotFoundError(f"Timeslot {timeslot_id} not found")
        return timeslot

    def get_open_timeslots(self, location_id: Optional[str] = None) -> list[Timeslot]:
        """Future, unbooked timeslots ("opportunities") in start order"""
        return self.repo.get_open_timeslots(self.db, self.clock(), location_id)

    def get_timeslots_for_host(self, host_id: str) -> list[Timeslot]:
        return self.repo.get_timeslots_for_host(self.db, host_id)

    def create_timeslot(
        self,
        host_id: str,
        start_time: datetime,
        duration_minutes: int,
        location_id: str,
        repeat_weekly: bool = False,
    ) -> list[Timeslot]:
        """
        Post availability, plus recurrence_count weekly copies when repeating.

        Copies are stored with repeat_weekly=False so they never expand again.
        The host earns POST_TIMESLOT for every occurrence.
        """
        if duration_minutes not in ALLOWED_DURATIONS:
            raise ValidationError(
                f"Duration must be one of {sorted(ALLOWED_DURATIONS)} minutes, got {duration_minutes}"
            )

        start_time = to_local_naive(start_time)
        if start_time <= self.clock():
            raise InvalidTimeError("Cannot post availability in the past")

        occurrences = [start_time]
        if repeat_weekly:
            occurrences += [start_time + timedelta(weeks=i) for i in range(1, self.recurrence_count + 1)]

        with unit_of_work(self.db):
            require_user(self.db, host_id)
            location = self.locations.get_location(self.db, location_id)
            if not location:
                raise NotFoundError(f"Location {location_id} not found")
            if not location.is_approved:
                raise InvalidStateError("Location has not been approved yet")

            created = []
            for index, occurrence in enumerate(occurrences):
                created.append(
                    self.repo.create_timeslot(
                        self.db,
                        host_user_id=host_id,
                        start_time=occurrence,
                        duration_minutes=int(duration_minutes),
                        location_id=location_id,
                        repeat_weekly=repeat_weekly and index == 0,
                    )
                )
                self.scoring.award(ScoringEvent.POST_TIMESLOT, host_id)

        logger.info(f"📅 User {host_id} posted {len(created)} timeslot(s) starting {start_time}")
        return created

    def accept_timeslot(self, timeslot_id: str, attendee_id: str) -> Meeting:
        """
        Book an open timeslot and create its CONFIRMED meeting.

        Raises NotFoundError if the timeslot is missing or already booked,
        SelfBookingError if the attendee hosts it, and ConflictError if a
        concurrent booking got there first. The returned meeting carries the
        confirmation invite in calendar_file (None if it could not be built).
        """
        with unit_of_work(self.db):
            timeslot = self.repo.get_timeslot(self.db, timeslot_id)
            if not timeslot or timeslot.is_booked:
                raise NotFoundError("Timeslot not found or already booked")
            if attendee_id == timeslot.host_user_id:
                raise SelfBookingError("You cannot book your own timeslot")

            host = require_user(self.db, timeslot.host_user_id)
            attendee = require_user(self.db, attendee_id)
            location = self.locations.get_location(self.db, timeslot.location_id)
            if not location:
                raise NotFoundError(f"Location {timeslot.location_id} not found")

            if not self.repo.mark_booked(self.db, timeslot.id, attendee.id):
                logger.warning(f"⚠️ Booking race lost on timeslot {timeslot_id} by {attendee_id}")
                raise ConflictError("This timeslot was just booked by someone else")

            meeting = self.meetings.create_meeting(
                self.db,
                host_user_id=host.id,
                attendee_user_id=attendee.id,
                timeslot_id=timeslot.id,
                location_id=timeslot.location_id,
                start_time=timeslot.start_time,
                duration_minutes=timeslot.duration_minutes,
                status=MeetingStatus.CONFIRMED.value,
            )
            self.scoring.award(ScoringEvent.ACCEPT_MEETING, host.id, attendee.id)

        logger.info(f"🤝 Meeting {meeting.id} confirmed: {host.id} hosting {attendee.id}")

        try:
            meeting.calendar_file = self.notifier.meeting_confirmed(meeting, host, attendee, location)
        except Exception as e:
            logger.error(f"❌ Failed to dispatch confirmation for meeting {meeting.id}: {e}")

        return meeting

    def delete_timeslot(
        self, timeslot_id: str, requester_id: str, requester_role: Optional[UserRole] = None
    ) -> None:
        """
        Remove a timeslot.

        Open slots: the host or an administrator. Booked slots: administrators
        only; the confirmed meeting is cancelled first (both parties get the
        administrator alert), then the timeslot row is deleted.
        """
        if requester_role is None:
            requester_role = require_user(self.db, requester_id).role

        timeslot = self.get_timeslot(timeslot_id)

        if timeslot.is_booked:
            if not permissions.can_delete_booked_timeslot(requester_role):
                raise ForbiddenError("Cannot delete a booked timeslot. Cancel the meeting first.")

            meeting = self.meetings.get_confirmed_for_timeslot(self.db, timeslot.id)
            if meeting:
                MeetingService(self.db, self.notifier, self.policy).cancel_meeting(
                    meeting.id, requester_id, admin_notice=True
                )
        elif timeslot.host_user_id != requester_id and not permissions.can_delete_any_timeslot(
            requester_role
        ):
            raise ForbiddenError("Only the host or an administrator can delete this timeslot")

        with unit_of_work(self.db):
            self.repo.delete_timeslot(self.db, self.get_timeslot(timeslot_id))

        # No points are revoked on deletion
        logger.info(f"🗑️ Timeslot {timeslot_id} deleted by {requester_id}")
