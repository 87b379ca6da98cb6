"""
Test location submission, approval and deletion
"""
import pytest

from coffeeconnect.domain.locations.service import LocationService
from coffeeconnect.domain.timeslots.service import TimeslotService
from coffeeconnect.exceptions import ForbiddenError, NotFoundError, ValidationError
from coffeeconnect.models import Location, Meeting, Timeslot
from coffeeconnect.seed import INITIAL_LOCATIONS, seed_locations
from tests.conftest import future, points


@pytest.fixture
def service(db):
    return LocationService(db)


class TestAddLocation:
    def test_submission_is_pending_and_awards_submitter(self, db, service, users):
        location = service.add_location(
            "Black Forest Coffee", "1 Shoup Rd, Black Forest, CO", 39.01, -104.70, users["other"].id
        )

        assert location.is_approved is False
        assert location.submitted_by_user_id == users["other"].id
        assert points(db, users["other"].id) == 5

    @pytest.mark.parametrize("latitude,longitude", [(91.0, 0.0), (-90.5, 0.0), (0.0, 180.1), (0.0, -181.0)])
    def test_out_of_range_coordinates(self, db, service, users, latitude, longitude):
        with pytest.raises(ValidationError):
            service.add_location("Nowhere", "Nowhere", latitude, longitude, users["other"].id)

        assert db.query(Location).count() == 0
        assert points(db, users["other"].id) == 0

    def test_unknown_submitter(self, db, service):
        with pytest.raises(NotFoundError):
            service.add_location("Cafe", "Somewhere", 39.0, -104.0, "user-missing")
        assert db.query(Location).count() == 0


class TestApproveLocation:
    def test_admin_approval_awards_submitter(self, db, service, users, pending_location):
        service.approve_location(pending_location.id, users["admin"].id)

        assert db.get(Location, pending_location.id).is_approved is True
        assert points(db, users["other"].id) == 20
        assert points(db, users["admin"].id) == 0

    def test_second_approval_does_not_pay_again(self, db, service, users, pending_location):
        service.approve_location(pending_location.id, users["admin"].id)
        service.approve_location(pending_location.id, users["admin"].id)

        assert points(db, users["other"].id) == 20

    @pytest.mark.parametrize("who", ["leader", "other"])
    def test_non_admin_cannot_approve(self, db, service, users, pending_location, who):
        with pytest.raises(ForbiddenError):
            service.approve_location(pending_location.id, users[who].id)

        assert db.get(Location, pending_location.id).is_approved is False
        assert points(db, users["other"].id) == 0

    def test_approved_location_accepts_timeslots(self, db, service, dispatcher, users, pending_location):
        service.approve_location(pending_location.id, users["admin"].id)

        created = TimeslotService(db, notifier=dispatcher).create_timeslot(
            users["host"].id, future(), 30, pending_location.id
        )
        assert len(created) == 1

    def test_missing_location(self, service, users):
        with pytest.raises(NotFoundError):
            service.approve_location("loc-missing", users["admin"].id)


class TestListLocations:
    def test_members_see_approved_only(self, service, users, location, pending_location):
        assert [l.id for l in service.get_locations(users["other"])] == [location.id]

    def test_admin_sees_pending(self, service, users, location, pending_location):
        ids = {l.id for l in service.get_locations(users["admin"], include_pending=True)}
        assert ids == {location.id, pending_location.id}

    def test_member_cannot_request_pending(self, service, users, location):
        with pytest.raises(ForbiddenError):
            service.get_locations(users["other"], include_pending=True)


class TestDeleteLocation:
    def test_delete_removes_timeslots_and_meetings(self, db, service, dispatcher, users, location):
        timeslots = TimeslotService(db, notifier=dispatcher)
        slots = timeslots.create_timeslot(users["host"].id, future(), 60, location.id, repeat_weekly=True)
        timeslots.accept_timeslot(slots[0].id, users["attendee"].id)

        result = service.delete_location(location.id, users["admin"])

        assert result == {"message": "Location deleted", "deletedTimeslots": 4, "deletedMeetings": 1}
        assert db.query(Location).count() == 0
        assert db.query(Timeslot).count() == 0
        assert db.query(Meeting).count() == 0
        # Points already earned stay
        assert points(db, users["host"].id) == 55

    def test_member_cannot_delete(self, db, service, users, location):
        with pytest.raises(ForbiddenError):
            service.delete_location(location.id, users["host"])
        assert db.query(Location).count() == 1


class TestSeedLocations:
    def test_seed_inserts_approved_static_locations_once(self, db):
        seed_locations(db)
        seed_locations(db)

        seeded = db.query(Location).all()
        assert len(seeded) == len(INITIAL_LOCATIONS)
        assert all(l.is_approved and l.is_static for l in seeded)
        assert "Mission Coffee Roasters" in {l.name for l in seeded}
