"""User service - Profiles, roles and the leaderboard"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...config import DEFAULT_PROFILE_PICTURE
from ...exceptions import ForbiddenError, InvalidStateError, NotFoundError
from ...models import User, UserRole
from ...shared import permissions
from ...shared.transaction import unit_of_work
from .repository import UserRepository
from .schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def require_user(db: Session, user_id: str) -> User:
    """Load a user or raise NotFoundError"""
    user = UserRepository.get_user(db, user_id)
    if not user:
        raise NotFoundError(f"User {user_id} not found")
    return user


class UserService:
    """Service layer for member profiles"""

    def __init__(self, db: Session):
        self.db = db
        self.repo = UserRepository()

    def get_users(self) -> list[User]:
        return self.repo.get_users(self.db)

    def get_user(self, user_id: str) -> User:
        return require_user(self.db, user_id)

    def get_leaderboard(self, limit: Optional[int] = None) -> list[tuple[int, User]]:
        """(rank, user) pairs, rank starting at 1"""
        return list(enumerate(self.repo.get_leaderboard(self.db, limit), start=1))

    def create_user(self, data: UserCreate, user_id: Optional[str] = None) -> User:
        """
        Create a member profile.

        New profiles always start as Members with zero points; user_id lets
        the auth layer reuse its own identifier.
        """
        with unit_of_work(self.db):
            if data.email and self.repo.get_user_by_email(self.db, data.email):
                raise InvalidStateError("Email already registered")
            if user_id and self.repo.get_user(self.db, user_id):
                raise InvalidStateError(f"User {user_id} already exists")

            fields = {
                "name": data.name,
                "email": data.email,
                "bio": data.bio,
                "phone_number": data.phoneNumber,
                "profile_picture": data.profilePicture or DEFAULT_PROFILE_PICTURE,
                "role": UserRole.MEMBER.value,
                "points": 0,
            }
            if user_id:
                fields["id"] = user_id
            user = self.repo.create_user(self.db, **fields)

        logger.info(f"👤 Created user {user.id} ({user.name})")
        return user

    def update_user(self, user_id: str, data: UserUpdate, requester: User) -> User:
        """Update a profile; members edit themselves, administrators anyone"""
        with unit_of_work(self.db):
            user = require_user(self.db, user_id)
            if requester.id != user.id and not permissions.can_manage_users(requester.role):
                raise ForbiddenError("You can only edit your own profile")

            updates = {
                "name": data.name,
                "bio": data.bio,
                "profile_picture": data.profilePicture,
                "phone_number": data.phoneNumber,
            }
            if data.role is not None and data.role != user.role:
                if not permissions.can_change_roles(requester.role):
                    logger.warning(f"⚠️ User {requester.id} attempted to change role of {user.id}")
                    raise ForbiddenError("Only administrators can change roles")
                updates["role"] = UserRole(data.role).value

            user = self.repo.update_user(self.db, user, **updates)
        return user

    def delete_user(self, user_id: str, requester: User) -> None:
        """
        Delete a profile together with its meeting history and timeslots.

        Refused while the user still has CONFIRMED meetings; those have to be
        cancelled first so the other party is notified.
        """
        with unit_of_work(self.db):
            user = require_user(self.db, user_id)
            if requester.id != user.id and not permissions.can_manage_users(requester.role):
                raise ForbiddenError("You can only delete your own profile")
            if self.repo.count_confirmed_meetings(self.db, user.id):
                raise InvalidStateError("Cancel confirmed meetings before deleting this user")
            deleted_meetings, deleted_timeslots = self.repo.delete_user(self.db, user)

        logger.info(
            f"🗑️ User {user_id} deleted by {requester.id} "
            f"({deleted_meetings} meetings, {deleted_timeslots} timeslots)"
        )
