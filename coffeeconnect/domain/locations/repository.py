"""Location repository - Database operations for meeting venues"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Location, Meeting, Timeslot


class LocationRepository:
    """Repository for location database operations"""

    @staticmethod
    def get_location(db: Session, location_id: str) -> Optional[Location]:
        return db.query(Location).filter(Location.id == location_id).first()

    @staticmethod
    def get_locations(db: Session, include_pending: bool = False) -> list[Location]:
        query = db.query(Location)
        if not include_pending:
            query = query.filter(Location.is_approved.is_(True))
        return query.order_by(Location.name).all()

    @staticmethod
    def create_location(db: Session, **location_data) -> Location:
        location = Location(**location_data)
        db.add(location)
        db.flush()
        return location

    @staticmethod
    def mark_approved(db: Session, location: Location) -> Location:
        location.is_approved = True
        db.flush()
        return location

    @staticmethod
    def delete_location(db: Session, location: Location) -> tuple[int, int]:
        """
        Delete a location and everything scheduled there.

        Returns (deleted_meetings, deleted_timeslots)
        """
        # Meetings first (FK to timeslots and locations)
        deleted_meetings = (
            db.query(Meeting)
            .filter(Meeting.location_id == location.id)
            .delete(synchronize_session=False)
        )
        deleted_timeslots = (
            db.query(Timeslot)
            .filter(Timeslot.location_id == location.id)
            .delete(synchronize_session=False)
        )
        db.delete(location)
        db.flush()
        return deleted_meetings, deleted_timeslots
