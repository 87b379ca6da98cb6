"""Announcement service - Leaders post, administrators remove"""

import logging
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import ForbiddenError, NotFoundError
from ...models import Announcement, User
from ...shared import permissions
from ...shared.transaction import unit_of_work
from .repository import AnnouncementRepository

logger = logging.getLogger(__name__)


class AnnouncementService:
    def __init__(self, db: Session):
        self.db = db
        self.repo = AnnouncementRepository()

    def get_announcements(self, limit: Optional[int] = None) -> list[Announcement]:
        return self.repo.get_announcements(self.db, limit)

    def create_announcement(self, title: str, content: str, author: User) -> Announcement:
        if not permissions.can_post_announcement(author.role):
            raise ForbiddenError("Only leaders and administrators can post announcements")

        with unit_of_work(self.db):
            announcement = self.repo.create_announcement(
                self.db,
                title=title,
                content=content,
                author_user_id=author.id,
                timestamp=datetime.now(),
            )

        logger.info(f"📣 Announcement {announcement.id} posted by {author.id}")
        return announcement

    def delete_announcement(self, announcement_id: str, requester: User) -> None:
        if not permissions.can_delete_announcement(requester.role):
            raise ForbiddenError("Only administrators can delete announcements")

        with unit_of_work(self.db):
            announcement = self.repo.get_announcement(self.db, announcement_id)
            if not announcement:
                raise NotFoundError(f"Announcement {announcement_id} not found")
            self.repo.delete_announcement(self.db, announcement)

        logger.info(f"🗑️ Announcement {announcement_id} deleted by {requester.id}")
