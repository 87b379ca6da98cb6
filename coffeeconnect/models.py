import enum
import uuid

from sqlalchemy import (
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.sql import func

from .database import Base


def generate_id():
    """Generate a UUID4 string primary key"""
    return str(uuid.uuid4())


class UserRole(str, enum.Enum):
    MEMBER = "Member"
    LEADER = "Leader"
    ADMINISTRATOR = "Administrator"


class MeetingStatus(str, enum.Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"
    COMPLETED = "COMPLETED"


class TimeslotDuration(int, enum.Enum):
    THIRTY_MINUTES = 30
    SIXTY_MINUTES = 60


ALLOWED_DURATIONS = frozenset(d.value for d in TimeslotDuration)


class User(Base):
    __tablename__ = "users"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, index=True, nullable=True)
    role = Column(String(20), default=UserRole.MEMBER.value, nullable=False)
    points = Column(Integer, default=0, nullable=False)  # Only ever incremented
    profile_picture = Column(String(500), nullable=True)  # URL or base64
    bio = Column(Text, nullable=True)
    phone_number = Column(String(20), nullable=True)  # E.164, SMS contact

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Location(Base):
    __tablename__ = "locations"

    id = Column(String(36), primary_key=True, default=generate_id)
    name = Column(String(255), nullable=False)
    address = Column(String(500), nullable=False)
    latitude = Column(Float, nullable=False)
    longitude = Column(Float, nullable=False)
    is_approved = Column(Boolean, default=False, nullable=False, index=True)
    submitted_by_user_id = Column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    is_static = Column(Boolean, default=False, nullable=False)  # Skip geocoding, trust lat/long
    approx_drive_minutes = Column(Integer, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Timeslot(Base):
    """
    A host-offered availability window.

    Invariant: booked_by_user_id is set if and only if is_booked is true.
    Open -> Booked happens only through the conditional update in
    TimeslotRepository.mark_booked.
    """

    __tablename__ = "timeslots"

    id = Column(String(36), primary_key=True, default=generate_id)
    host_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    start_time = Column(DateTime, nullable=False, index=True)  # Local wall-clock time
    duration_minutes = Column(Integer, nullable=False)
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=False, index=True)
    is_booked = Column(Boolean, default=False, nullable=False)
    booked_by_user_id = Column(String(36), ForeignKey("users.id"), nullable=True)
    repeat_weekly = Column(Boolean, default=False, nullable=False)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Meeting(Base):
    """
    A confirmed pairing of host and attendee against a timeslot.

    Status workflow: CONFIRMED -> CANCELLED | COMPLETED (both terminal)
    """

    __tablename__ = "meetings"

    id = Column(String(36), primary_key=True, default=generate_id)
    host_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    attendee_user_id = Column(String(36), ForeignKey("users.id"), nullable=False, index=True)
    timeslot_id = Column(
        String(36), ForeignKey("timeslots.id", ondelete="SET NULL"), nullable=True, index=True
    )
    location_id = Column(String(36), ForeignKey("locations.id"), nullable=False)
    start_time = Column(DateTime, nullable=False)
    duration_minutes = Column(Integer, nullable=False)
    status = Column(String(20), default=MeetingStatus.CONFIRMED.value, nullable=False, index=True)
    cancelled_by_user_id = Column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )

    # Invite text produced when the booking is confirmed; not persisted
    calendar_file = None

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class Announcement(Base):
    __tablename__ = "announcements"

    id = Column(String(36), primary_key=True, default=generate_id)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    author_user_id = Column(
        String(36), ForeignKey("users.id", ondelete="SET NULL"), nullable=True
    )
    timestamp = Column(DateTime, server_default=func.now(), nullable=False, index=True)

    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())


class SMSLog(Base):
    """Track SMS messages sent via Twilio"""

    __tablename__ = "sms_logs"

    id = Column(Integer, primary_key=True, index=True)

    # Message details
    to_phone = Column(String(20), nullable=False)
    message_body = Column(Text, nullable=False)
    message_type = Column(String(50), nullable=False)
    entity_type = Column(String(50), nullable=True)
    entity_id = Column(String(36), nullable=True)

    # Twilio response
    twilio_message_sid = Column(String(100), nullable=True)
    status = Column(String(20), nullable=False)  # sent, failed
    error_message = Column(Text, nullable=True)

    created_at = Column(DateTime, server_default=func.now())
