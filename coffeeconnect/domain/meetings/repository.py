"""Meeting repository - Database operations for confirmed pairings"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Meeting, MeetingStatus


class MeetingRepository:
    """Repository for meeting database operations"""

    @staticmethod
    def get_meeting(db: Session, meeting_id: str) -> Optional[Meeting]:
        return db.query(Meeting).filter(Meeting.id == meeting_id).first()

    @staticmethod
    def get_confirmed_for_timeslot(db: Session, timeslot_id: str) -> Optional[Meeting]:
        return (
            db.query(Meeting)
            .filter(
                Meeting.timeslot_id == timeslot_id,
                Meeting.status == MeetingStatus.CONFIRMED.value,
            )
            .first()
        )

    @staticmethod
    def get_meetings_for_user(
        db: Session, user_id: str, status: Optional[MeetingStatus] = None
    ) -> list[Meeting]:
        """Meetings where the user is host or attendee"""
        query = db.query(Meeting).filter(
            (Meeting.host_user_id == user_id) | (Meeting.attendee_user_id == user_id)
        )
        if status:
            query = query.filter(Meeting.status == MeetingStatus(status).value)
        return query.order_by(Meeting.start_time).all()

    @staticmethod
    def create_meeting(db: Session, **meeting_data) -> Meeting:
        meeting = Meeting(**meeting_data)
        db.add(meeting)
        db.flush()
        return meeting

    @staticmethod
    def transition(
        db: Session,
        meeting_id: str,
        new_status: MeetingStatus,
        cancelled_by_user_id: Optional[str] = None,
    ) -> bool:
        """
        Move a CONFIRMED meeting to a terminal status.

        Conditional on the row still being CONFIRMED; returns False otherwise.
        """
        values = {Meeting.status: MeetingStatus(new_status).value}
        if cancelled_by_user_id:
            values[Meeting.cancelled_by_user_id] = cancelled_by_user_id
        updated = (
            db.query(Meeting)
            .filter(Meeting.id == meeting_id, Meeting.status == MeetingStatus.CONFIRMED.value)
            .update(values, synchronize_session=False)
        )
        return updated == 1
