"""User domain schemas - Pydantic models for validation"""

from typing import Optional

from pydantic import BaseModel, EmailStr, Field, field_validator

from ...models import UserRole
from ...shared.validators import validate_us_phone


class UserCreate(BaseModel):
    """Schema for creating a member profile"""

    name: str = Field(..., min_length=1, max_length=255)
    email: Optional[EmailStr] = None
    bio: Optional[str] = None
    profilePicture: Optional[str] = None
    phoneNumber: Optional[str] = None

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_us_phone(v)
        return v


class UserUpdate(BaseModel):
    """Schema for updating a profile"""

    name: Optional[str] = Field(None, min_length=1, max_length=255)
    bio: Optional[str] = None
    profilePicture: Optional[str] = None
    phoneNumber: Optional[str] = None
    role: Optional[UserRole] = None

    @field_validator("phoneNumber")
    @classmethod
    def validate_phone(cls, v):
        if v:
            return validate_us_phone(v)
        return v


class UserResponse(BaseModel):
    """Schema for user response"""

    id: str
    name: str
    role: UserRole
    points: int
    profilePicture: Optional[str] = None
    bio: Optional[str] = None

    class Config:
        from_attributes = True


class LeaderboardEntry(BaseModel):
    rank: int
    user: UserResponse
