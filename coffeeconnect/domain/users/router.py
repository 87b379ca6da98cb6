"""User router - FastAPI endpoints for profiles and the leaderboard"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, Query
from sqlalchemy.orm import Session

from ...auth import get_current_user
from ...database import get_db
from ...models import User
from .schemas import LeaderboardEntry, UserCreate, UserResponse, UserUpdate
from .service import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/users", tags=["Users"])


def get_user_service(db: Session = Depends(get_db)) -> UserService:
    """Dependency injection for UserService"""
    return UserService(db)


def to_user_response(u: User) -> UserResponse:
    return UserResponse(
        id=u.id,
        name=u.name,
        role=u.role,
        points=u.points,
        profilePicture=u.profile_picture,
        bio=u.bio,
    )


@router.get("", response_model=list[UserResponse])
async def get_users(
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return [to_user_response(u) for u in service.get_users()]


@router.get("/leaderboard", response_model=list[LeaderboardEntry])
async def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=500),
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    """Members ranked by points"""
    return [
        LeaderboardEntry(rank=rank, user=to_user_response(u))
        for rank, u in service.get_leaderboard(limit)
    ]


@router.get("/{user_id}", response_model=UserResponse)
async def get_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return to_user_response(service.get_user(user_id))


@router.post("", response_model=UserResponse)
async def create_user(
    data: UserCreate,
    x_user_id: Optional[str] = Header(None),
    service: UserService = Depends(get_user_service),
):
    """Create the profile for a freshly authenticated user"""
    return to_user_response(service.create_user(data, user_id=x_user_id))


@router.patch("/{user_id}", response_model=UserResponse)
async def update_user(
    user_id: str,
    data: UserUpdate,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    return to_user_response(service.update_user(user_id, data, current_user))


@router.delete("/{user_id}")
async def delete_user(
    user_id: str,
    current_user: User = Depends(get_current_user),
    service: UserService = Depends(get_user_service),
):
    service.delete_user(user_id, current_user)
    return {"message": "User deleted"}
