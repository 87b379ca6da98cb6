"""Scoring service - applies point awards inside the caller's transaction"""

import logging
from typing import Optional

from sqlalchemy.orm import Session

from ...exceptions import NotFoundError
from ..users.repository import UserRepository
from .policy import DEFAULT_POLICY, ScoringEvent, ScoringPolicy

logger = logging.getLogger(__name__)


class ScoringService:
    """Service layer for point awards"""

    def __init__(self, db: Session, policy: Optional[ScoringPolicy] = None):
        self.db = db
        self.policy = policy or DEFAULT_POLICY
        self.repo = UserRepository()

    def award(self, event: ScoringEvent, *user_ids: str) -> int:
        """
        Credit the event's points to every listed user.

        Does not commit; the lifecycle operation that triggered the event owns
        the transaction. Returns the delta applied per user.
        """
        delta = self.policy.points_for(event)
        ids = [uid for uid in user_ids if uid]
        if not ids or delta == 0:
            return delta

        updated = self.repo.increment_points(self.db, ids, delta)
        if updated != len(ids):
            raise NotFoundError("Cannot award points to an unknown user")

        logger.info(f"🏆 {event.value}: +{delta} to {', '.join(ids)}")
        return delta
