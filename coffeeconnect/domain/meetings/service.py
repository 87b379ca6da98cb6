"""
Meeting service - Cancellation and completion of confirmed meetings.

Meetings are created by TimeslotService.accept_timeslot; this service owns
every transition after that: CONFIRMED -> CANCELLED (releases the timeslot)
and CONFIRMED -> COMPLETED (awards both parties).
"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ForbiddenError, InvalidStateError, NotFoundError
from ...models import Location, Meeting, MeetingStatus, User
from ...services.calendar_export import generate_calendar_file
from ...services.notification_service import NotificationDispatcher
from ...shared import permissions
from ...shared.transaction import unit_of_work
from ..locations.repository import LocationRepository
from ..scoring import ScoringEvent, ScoringPolicy, ScoringService
from ..timeslots.repository import TimeslotRepository
from ..users.repository import UserRepository
from ..users.service import require_user
from .repository import MeetingRepository

logger = logging.getLogger(__name__)


class MeetingService:
    """Service layer for meeting lifecycle"""

    def __init__(
        self,
        db: Session,
        notifier: Optional[NotificationDispatcher] = None,
        policy: Optional[ScoringPolicy] = None,
    ):
        self.db = db
        self.repo = MeetingRepository()
        self.timeslots = TimeslotRepository()
        self.locations = LocationRepository()
        self.scoring = ScoringService(db, policy)
        self.notifier = notifier or NotificationDispatcher(db)

    def get_meeting(self, meeting_id: str) -> Meeting:
        meeting = self.repo.get_meeting(self.db, meeting_id)
        if not meeting:
            raise NotFoundError(f"Meeting {meeting_id} not found")
        return meeting

    def get_meetings_for_user(
        self, user_id: str, status: Optional[MeetingStatus] = None
    ) -> list[Meeting]:
        return self.repo.get_meetings_for_user(self.db, user_id, status)

    def _require_confirmed(self, meeting_id: str) -> Meeting:
        meeting = self.get_meeting(meeting_id)
        if meeting.status != MeetingStatus.CONFIRMED.value:
            raise InvalidStateError(f"Meeting is already {meeting.status}")
        return meeting

    @staticmethod
    def _check_party(meeting: Meeting, user: User, action: str) -> None:
        is_party = user.id in (meeting.host_user_id, meeting.attendee_user_id)
        if not is_party and not permissions.can_cancel_any_meeting(user.role):
            logger.warning(f"⚠️ User {user.id} attempted to {action} meeting {meeting.id}")
            raise ForbiddenError(f"Only the host, the attendee or an administrator can {action} this meeting")

    def cancel_meeting(
        self, meeting_id: str, cancelling_user_id: str, admin_notice: bool = False
    ) -> Meeting:
        """
        Cancel a CONFIRMED meeting and release its timeslot.

        No points are deducted. By default the other party is told who
        cancelled; with admin_notice both parties get the administrator alert
        instead (used when an administrator removes a booked timeslot).
        """
        with unit_of_work(self.db):
            meeting = self._require_confirmed(meeting_id)
            canceller = require_user(self.db, cancelling_user_id)
            self._check_party(meeting, canceller, "cancel")

            if not self.repo.transition(
                self.db, meeting.id, MeetingStatus.CANCELLED, cancelled_by_user_id=canceller.id
            ):
                raise InvalidStateError("Meeting is no longer confirmed")
            self.timeslots.release(self.db, meeting.timeslot_id)

        logger.info(f"❌ Meeting {meeting_id} cancelled by {cancelling_user_id}")
        self._send_cancellation(meeting, canceller, admin_notice)
        return meeting

    def complete_meeting(self, meeting_id: str, requester_id: Optional[str] = None) -> Meeting:
        """Mark a CONFIRMED meeting as held; both parties earn COMPLETE_MEETING"""
        with unit_of_work(self.db):
            meeting = self._require_confirmed(meeting_id)
            if requester_id:
                self._check_party(meeting, require_user(self.db, requester_id), "complete")

            if not self.repo.transition(self.db, meeting.id, MeetingStatus.COMPLETED):
                raise InvalidStateError("Meeting is no longer confirmed")
            self.scoring.award(
                ScoringEvent.COMPLETE_MEETING, meeting.host_user_id, meeting.attendee_user_id
            )

        logger.info(f"☕ Meeting {meeting_id} completed")
        return meeting

    def get_calendar_file(self, meeting_id: str, requester: User) -> str:
        """The .ics invite for a meeting, for its parties and administrators"""
        meeting = self.get_meeting(meeting_id)
        self._check_party(meeting, requester, "download")
        host, attendee, location = self._load_parties(meeting)
        if not (host and attendee and location):
            raise NotFoundError("Meeting participants or location no longer exist")
        return generate_calendar_file(meeting, location, host, attendee)

    def _load_parties(
        self, meeting: Meeting
    ) -> tuple[Optional[User], Optional[User], Optional[Location]]:
        return (
            UserRepository.get_user(self.db, meeting.host_user_id),
            UserRepository.get_user(self.db, meeting.attendee_user_id),
            self.locations.get_location(self.db, meeting.location_id),
        )

    def _send_cancellation(self, meeting: Meeting, canceller: User, admin_notice: bool) -> None:
        try:
            host, attendee, location = self._load_parties(meeting)
            if not (host and attendee and location):
                logger.warning(f"⚠️ Skipping cancellation notice for meeting {meeting.id}: missing party")
                return

            if admin_notice:
                self.notifier.meeting_cancelled_by_admin(meeting, host, attendee, location)
                return

            if canceller.id == host.id:
                recipients = [attendee]
            elif canceller.id == attendee.id:
                recipients = [host]
            else:
                recipients = [host, attendee]
            self.notifier.meeting_cancelled(meeting, canceller, recipients, location)
        except Exception as e:
            logger.error(f"❌ Failed to dispatch cancellation for meeting {meeting.id}: {e}")
