"""Announcement repository - Database operations for community notices"""

from typing import Optional

from sqlalchemy.orm import Session

from ...models import Announcement


class AnnouncementRepository:
    """Repository for announcement database operations"""

    @staticmethod
    def get_announcement(db: Session, announcement_id: str) -> Optional[Announcement]:
        return db.query(Announcement).filter(Announcement.id == announcement_id).first()

    @staticmethod
    def get_announcements(db: Session, limit: Optional[int] = None) -> list[Announcement]:
        """Newest first"""
        query = db.query(Announcement).order_by(Announcement.timestamp.desc())
        if limit:
            query = query.limit(limit)
        return query.all()

    @staticmethod
    def create_announcement(db: Session, **announcement_data) -> Announcement:
        announcement = Announcement(**announcement_data)
        db.add(announcement)
        db.flush()
        return announcement

    @staticmethod
    def delete_announcement(db: Session, announcement: Announcement) -> None:
        db.delete(announcement)
        db.flush()
