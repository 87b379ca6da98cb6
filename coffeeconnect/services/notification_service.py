"""
Meeting Notification Dispatcher
Sends confirmation and cancellation SMS for meeting lifecycle events and
builds the calendar invite for confirmed meetings.

Every method here is fire-and-forget from the caller's point of view:
failures are logged and reported through the return value, never raised.
"""

import logging
from datetime import datetime
from typing import Callable, Optional

from sqlalchemy.orm import Session

from ..models import Location, Meeting, User
from ..shared.validators import validate_us_phone
from .calendar_export import generate_calendar_file
from .twilio_service import send_sms

logger = logging.getLogger(__name__)


def format_meeting_time(value: datetime) -> str:
    """e.g. 'Mar 05, 2026 9:30 AM'"""
    hour = value.hour % 12 or 12
    return f"{value:%b %d, %Y} {hour}:{value:%M %p}"


class NotificationDispatcher:
    """Outbound side effects of meeting confirm/cancel transitions"""

    def __init__(self, db: Optional[Session] = None, sms_func: Callable = send_sms):
        self.db = db
        self.sms_func = sms_func

    def notify(
        self,
        recipient_contact: Optional[str],
        message: str,
        message_type: str = "general",
        entity_id: Optional[str] = None,
    ) -> bool:
        """Send one message; returns True only if the transport accepted it"""
        if not recipient_contact:
            logger.debug(f"⚠️ No contact for {message_type} notification")
            return False

        try:
            phone = recipient_contact
            if not phone.startswith("+"):
                phone = validate_us_phone(phone)

            success, error = self.sms_func(
                to_phone=phone,
                message_body=message,
                message_type=message_type,
                db=self.db,
                entity_type="Meeting" if entity_id else None,
                entity_id=entity_id,
            )
            if success:
                return True
            if error and "disabled" not in error.lower() and "not configured" not in error.lower():
                logger.warning(f"⚠️ {message_type} SMS not sent to {phone}: {error}")
            else:
                logger.debug(f"ℹ️ {message_type} SMS skipped: {error}")
            return False
        except Exception as e:
            logger.error(f"❌ Failed to send {message_type} SMS to {recipient_contact}: {e}")
            return False

    def meeting_confirmed(
        self, meeting: Meeting, host: User, attendee: User, location: Location
    ) -> Optional[str]:
        """
        Tell both parties the meeting is on and build the calendar invite.

        Returns the calendar file text, or None if it could not be generated.
        """
        when = format_meeting_time(meeting.start_time)
        self.notify(
            host.phone_number,
            f"SUCCESS! You have a coffee meeting with {attendee.name} on {when} at "
            f"{location.name}. Check your in-app calendar for details and an .ics file!",
            message_type="meeting_confirmation",
            entity_id=meeting.id,
        )
        self.notify(
            attendee.phone_number,
            f"SUCCESS! You're meeting {host.name} on {when} at {location.name}. "
            f"Check your in-app calendar for details and an .ics file!",
            message_type="meeting_confirmation",
            entity_id=meeting.id,
        )

        try:
            ics = generate_calendar_file(meeting, location, host, attendee)
            logger.info(f"📅 Calendar file generated for meeting {meeting.id}")
            return ics
        except Exception as e:
            logger.error(f"❌ Failed to generate calendar file for meeting {meeting.id}: {e}")
            return None

    def meeting_cancelled(
        self,
        meeting: Meeting,
        cancelled_by: User,
        recipients: list[User],
        location: Location,
    ) -> None:
        """Tell the other party (or parties) who cancelled"""
        when = format_meeting_time(meeting.start_time)
        message = (
            f"{cancelled_by.name} has cancelled your coffee meeting on {when} at "
            f"{location.name}. Please check the app for updates."
        )
        for recipient in recipients:
            self.notify(
                recipient.phone_number,
                message,
                message_type="meeting_cancellation",
                entity_id=meeting.id,
            )

    def meeting_cancelled_by_admin(
        self, meeting: Meeting, host: User, attendee: User, location: Location
    ) -> None:
        when = format_meeting_time(meeting.start_time)
        for recipient, other in ((host, attendee), (attendee, host)):
            self.notify(
                recipient.phone_number,
                f"ALERT: Your meeting with {other.name} on {when} at {location.name} "
                f"has been cancelled by an administrator.",
                message_type="meeting_cancellation",
                entity_id=meeting.id,
            )
