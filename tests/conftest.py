import os
from datetime import datetime, timedelta

# Keep the module-level engine off disk and SMS off before the package loads
os.environ.setdefault("DATABASE_URL", "sqlite://")
os.environ.setdefault("SMS_ENABLED", "false")
os.environ.setdefault("SEED_LOCATIONS", "false")

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from coffeeconnect.database import Base, enable_sqlite_foreign_keys
from coffeeconnect.models import Location, Meeting, MeetingStatus, Timeslot, User, UserRole
from coffeeconnect.services.notification_service import NotificationDispatcher


class RecordingDispatcher(NotificationDispatcher):
    """Dispatcher whose transport records messages instead of sending them"""

    def __init__(self):
        self.sent = []
        self.calendar_files = []
        super().__init__(db=None, sms_func=self._record)

    def _record(self, to_phone, message_body, message_type, **kwargs):
        self.sent.append((to_phone, message_body, message_type))
        return True, None

    def meeting_confirmed(self, meeting, host, attendee, location):
        ics = super().meeting_confirmed(meeting, host, attendee, location)
        self.calendar_files.append(ics)
        return ics

    def messages_to(self, phone):
        return [body for to, body, _ in self.sent if to == phone]


def future(days=2, hour=9, minute=30):
    """A whole-minute local time some days ahead"""
    base = datetime.now() + timedelta(days=days)
    return base.replace(hour=hour, minute=minute, second=0, microsecond=0)


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://", connect_args={"check_same_thread": False}, poolclass=StaticPool
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def db(engine):
    session = sessionmaker(bind=engine, autoflush=False)()
    yield session
    session.close()


@pytest.fixture
def dispatcher():
    return RecordingDispatcher()


def _user(db, user_id, name, role=UserRole.MEMBER, phone=None, points=0):
    user = User(id=user_id, name=name, role=role.value, phone_number=phone, points=points)
    db.add(user)
    return user


@pytest.fixture
def users(db):
    """admin, leader, host, attendee and an unrelated member"""
    people = {
        "admin": _user(db, "user-admin", "John Doe", UserRole.ADMINISTRATOR, "+15550000001"),
        "leader": _user(db, "user-leader", "Jane Smith", UserRole.LEADER, "+15550000002"),
        "host": _user(db, "user-host", "Bob Johnson", UserRole.MEMBER, "+15550000003"),
        "attendee": _user(db, "user-attendee", "Alice Williams", UserRole.MEMBER, "+15550000004"),
        "other": _user(db, "user-other", "Charlie Brown", UserRole.MEMBER, "+15550000005"),
    }
    db.commit()
    return people


@pytest.fixture
def location(db):
    loc = Location(
        id="loc-mission",
        name="Mission Coffee Roasters",
        address="11641 Ridgeline Dr Ste 170, Colorado Springs, CO 80921",
        latitude=39.014200,
        longitude=-104.796600,
        is_approved=True,
    )
    db.add(loc)
    db.commit()
    return loc


@pytest.fixture
def pending_location(db, users):
    loc = Location(
        id="loc-pending",
        name="Corner Cafe",
        address="1 Main St, Monument, CO 80132",
        latitude=39.09,
        longitude=-104.87,
        is_approved=False,
        submitted_by_user_id=users["other"].id,
    )
    db.add(loc)
    db.commit()
    return loc


def points(db, user_id):
    return db.get(User, user_id).points


def assert_booking_invariants(db):
    """is_booked <=> booked_by set; every CONFIRMED meeting has exactly one booked slot"""
    for t in db.query(Timeslot).all():
        assert t.is_booked == (t.booked_by_user_id is not None)
    for m in db.query(Meeting).filter(Meeting.status == MeetingStatus.CONFIRMED.value).all():
        slots = db.query(Timeslot).filter(Timeslot.id == m.timeslot_id).all()
        assert len(slots) == 1
        assert slots[0].is_booked is True
