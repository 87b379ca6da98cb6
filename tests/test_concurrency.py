"""
Test booking races, transaction rollback and concurrent point awards
"""
import pytest
from sqlalchemy import create_engine
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import sessionmaker

from coffeeconnect.database import Base, enable_sqlite_foreign_keys
from coffeeconnect.domain.meetings.repository import MeetingRepository
from coffeeconnect.domain.scoring import ScoringEvent, ScoringService
from coffeeconnect.domain.timeslots.service import TimeslotService
from coffeeconnect.exceptions import ConflictError, StoreError
from coffeeconnect.models import Location, Meeting, Timeslot, User, UserRole
from tests.conftest import RecordingDispatcher, assert_booking_invariants, future, points


@pytest.fixture
def shared_engine(tmp_path):
    """File-backed database so two sessions see each other's commits"""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'race.db'}", connect_args={"check_same_thread": False}
    )
    enable_sqlite_foreign_keys(engine)
    Base.metadata.create_all(engine)
    Session = sessionmaker(bind=engine, autoflush=False)

    with Session() as setup:
        setup.add_all(
            [
                User(id="host", name="Host", role=UserRole.MEMBER.value, points=0),
                User(id="alice", name="Alice", role=UserRole.MEMBER.value, points=0),
                User(id="bob", name="Bob", role=UserRole.MEMBER.value, points=0),
                Location(
                    id="loc",
                    name="Mission Coffee Roasters",
                    address="11641 Ridgeline Dr Ste 170, Colorado Springs, CO 80921",
                    latitude=39.0142,
                    longitude=-104.7966,
                    is_approved=True,
                ),
            ]
        )
        setup.commit()

    yield Session
    engine.dispose()


class TestBookingRace:
    def test_second_booking_of_same_slot_loses(self, shared_engine):
        Session = shared_engine
        with Session() as setup:
            slot_id = TimeslotService(setup, notifier=RecordingDispatcher()).create_timeslot(
                "host", future(), 60, "loc"
            )[0].id

        session_a, session_b = Session(), Session()
        try:
            # Session A has already seen the slot as open before B books it
            assert session_a.get(Timeslot, slot_id).is_booked is False

            winner = TimeslotService(session_b, notifier=RecordingDispatcher()).accept_timeslot(
                slot_id, "alice"
            )

            loser_dispatcher = RecordingDispatcher()
            with pytest.raises(ConflictError):
                TimeslotService(session_a, notifier=loser_dispatcher).accept_timeslot(slot_id, "bob")
            assert loser_dispatcher.sent == []
        finally:
            session_a.close()
            session_b.close()

        with Session() as check:
            assert check.query(Meeting).count() == 1
            assert check.get(Meeting, winner.id).attendee_user_id == "alice"
            assert check.get(Timeslot, slot_id).booked_by_user_id == "alice"
            assert points(check, "host") == 10 + 15
            assert points(check, "alice") == 15
            assert points(check, "bob") == 0
            assert_booking_invariants(check)

    def test_concurrent_awards_are_not_lost(self, shared_engine):
        Session = shared_engine
        session_a, session_b = Session(), Session()
        try:
            # Both sessions hold a stale copy of the same user
            assert session_a.get(User, "alice").points == 0
            assert session_b.get(User, "alice").points == 0

            ScoringService(session_a).award(ScoringEvent.POST_TIMESLOT, "alice")
            session_a.commit()
            ScoringService(session_b).award(ScoringEvent.POST_TIMESLOT, "alice")
            session_b.commit()
        finally:
            session_a.close()
            session_b.close()

        with Session() as check:
            assert points(check, "alice") == 20


class TestBookingAtomicity:
    def test_failed_meeting_insert_rolls_back_booking(self, db, dispatcher, users, location, monkeypatch):
        service = TimeslotService(db, notifier=dispatcher)
        slot = service.create_timeslot(users["host"].id, future(), 60, location.id)[0]

        def failing_create(db, **meeting_data):
            raise OperationalError("INSERT INTO meetings", {}, Exception("disk I/O error"))

        monkeypatch.setattr(MeetingRepository, "create_meeting", staticmethod(failing_create))

        with pytest.raises(StoreError):
            service.accept_timeslot(slot.id, users["attendee"].id)

        timeslot = db.get(Timeslot, slot.id)
        assert timeslot.is_booked is False
        assert timeslot.booked_by_user_id is None
        assert db.query(Meeting).count() == 0
        assert points(db, users["host"].id) == 10
        assert points(db, users["attendee"].id) == 0
        assert dispatcher.sent == []
