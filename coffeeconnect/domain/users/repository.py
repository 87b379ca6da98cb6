"""User repository - Database operations for member profiles and points"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Announcement, Location, Meeting, MeetingStatus, Timeslot, User


class UserRepository:
    """Repository for user database operations"""

    @staticmethod
    def get_user(db: Session, user_id: str) -> Optional[User]:
        return db.query(User).filter(User.id == user_id).first()

    @staticmethod
    def get_user_by_email(db: Session, email: str) -> Optional[User]:
        return db.query(User).filter(User.email == email).first()

    @staticmethod
    def get_users(db: Session) -> list[User]:
        return db.query(User).order_by(User.name).all()

    @staticmethod
    def get_leaderboard(db: Session, limit: Optional[int] = None) -> list[User]:
        """Users ordered by points, highest first; ties broken by name"""
        query = db.query(User).order_by(User.points.desc(), User.name)
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def create_user(db: Session, **user_data) -> User:
        user = User(**user_data)
        db.add(user)
        db.flush()
        return user

    @staticmethod
    def update_user(db: Session, user: User, **updates) -> User:
        """Update a user with provided fields"""
        for key, value in updates.items():
            if value is not None and hasattr(user, key):
                setattr(user, key, value)
        db.flush()
        return user

    @staticmethod
    def increment_points(db: Session, user_ids: list[str], delta: int) -> int:
        """
        Add delta to each user's points inside the database.

        Returns the number of rows updated.
        """
        if not user_ids:
            return 0
        updated = 0
        # One UPDATE per occurrence so a user listed twice is credited twice
        for user_id in user_ids:
            updated += (
                db.query(User)
                .filter(User.id == user_id)
                .update({User.points: User.points + delta}, synchronize_session=False)
            )
        return updated

    @staticmethod
    def count_confirmed_meetings(db: Session, user_id: str) -> int:
        return (
            db.query(Meeting)
            .filter(
                (Meeting.host_user_id == user_id) | (Meeting.attendee_user_id == user_id),
                Meeting.status == MeetingStatus.CONFIRMED.value,
            )
            .count()
        )

    @staticmethod
    def delete_user(db: Session, user: User) -> tuple[int, int]:
        """
        Delete a user with their meeting history and every timeslot they
        hosted or booked. Callers must check for CONFIRMED meetings first.

        Returns (deleted_meetings, deleted_timeslots)
        """
        party = (Meeting.host_user_id == user.id) | (Meeting.attendee_user_id == user.id)
        deleted_meetings = db.query(Meeting).filter(party).delete(synchronize_session=False)

        owned = (Timeslot.host_user_id == user.id) | (Timeslot.booked_by_user_id == user.id)
        timeslot_ids = [row.id for row in db.query(Timeslot.id).filter(owned)]
        if timeslot_ids:
            # Other users' cancelled meetings can still point at a slot this user rebooked
            db.query(Meeting).filter(Meeting.timeslot_id.in_(timeslot_ids)).update(
                {Meeting.timeslot_id: None}, synchronize_session=False
            )
            db.query(Timeslot).filter(Timeslot.id.in_(timeslot_ids)).delete(
                synchronize_session=False
            )

        db.query(Meeting).filter(Meeting.cancelled_by_user_id == user.id).update(
            {Meeting.cancelled_by_user_id: None}, synchronize_session=False
        )
        db.query(Location).filter(Location.submitted_by_user_id == user.id).update(
            {Location.submitted_by_user_id: None}, synchronize_session=False
        )
        db.query(Announcement).filter(Announcement.author_user_id == user.id).update(
            {Announcement.author_user_id: None}, synchronize_session=False
        )

        db.delete(user)
        db.flush()
        return deleted_meetings, len(timeslot_ids)
