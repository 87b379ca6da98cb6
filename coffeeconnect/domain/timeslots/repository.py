"""Timeslot repository - Database operations for availability windows"""

from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...models import Meeting, Timeslot


class TimeslotRepository:
    """Repository for timeslot database operations"""

    @staticmethod
    def get_timeslot(db: Session, timeslot_id: str) -> Optional[Timeslot]:
        return db.query(Timeslot).filter(Timeslot.id == timeslot_id).first()

    @staticmethod
    def get_open_timeslots(db: Session, after: datetime, location_id: Optional[str] = None) -> list[Timeslot]:
        """Unbooked timeslots starting after the given time"""
        query = db.query(Timeslot).filter(
            Timeslot.is_booked.is_(False), Timeslot.start_time > after
        )
        if location_id:
            query = query.filter(Timeslot.location_id == location_id)
        return query.order_by(Timeslot.start_time).all()

    @staticmethod
    def get_timeslots_for_host(db: Session, host_user_id: str) -> list[Timeslot]:
        return (
            db.query(Timeslot)
            .filter(Timeslot.host_user_id == host_user_id)
            .order_by(Timeslot.start_time)
            .all()
        )

    @staticmethod
    def create_timeslot(db: Session, **timeslot_data) -> Timeslot:
        timeslot = Timeslot(is_booked=False, booked_by_user_id=None, **timeslot_data)
        db.add(timeslot)
        db.flush()
        return timeslot

    @staticmethod
    def mark_booked(db: Session, timeslot_id: str, attendee_user_id: str) -> bool:
        """
        Compare-and-swap Open -> Booked.

        Returns False when the timeslot was no longer open (a concurrent
        booking won, or it was deleted).
        """
        updated = (
            db.query(Timeslot)
            .filter(Timeslot.id == timeslot_id, Timeslot.is_booked.is_(False))
            .update(
                {Timeslot.is_booked: True, Timeslot.booked_by_user_id: attendee_user_id},
                synchronize_session=False,
            )
        )
        return updated == 1

    @staticmethod
    def release(db: Session, timeslot_id: Optional[str]) -> int:
        """Return a timeslot to Open; safe to call on an already open or missing slot"""
        if not timeslot_id:
            return 0
        return (
            db.query(Timeslot)
            .filter(Timeslot.id == timeslot_id)
            .update(
                {Timeslot.is_booked: False, Timeslot.booked_by_user_id: None},
                synchronize_session=False,
            )
        )

    @staticmethod
    def delete_timeslot(db: Session, timeslot: Timeslot) -> None:
        """Delete a timeslot, detaching any historical meetings that referenced it"""
        db.query(Meeting).filter(Meeting.timeslot_id == timeslot.id).update(
            {Meeting.timeslot_id: None}, synchronize_session=False
        )
        db.delete(timeslot)
        db.flush()
