"""
Current-user resolution.

Authentication itself is handled upstream (the identity provider / gateway);
this layer only turns the authenticated user id it forwards in the
X-User-Id header into a User row.
"""

import logging
from typing import Optional

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from .database import get_db
from .domain.users.repository import UserRepository
from .models import User

logger = logging.getLogger(__name__)


async def get_current_user(
    x_user_id: Optional[str] = Header(None),
    db: Session = Depends(get_db),
) -> User:
    """Get current user from the forwarded user id"""
    if not x_user_id:
        logger.error("❌ No user id provided")
        raise HTTPException(
            status_code=401,
            detail="Not authenticated. Please provide the X-User-Id header.",
        )

    user = UserRepository.get_user(db, x_user_id)
    if not user:
        logger.warning(f"⚠️ Unknown user id presented: {x_user_id}")
        raise HTTPException(status_code=401, detail="Unknown user")
    return user
