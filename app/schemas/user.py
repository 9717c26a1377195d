# app/schemas/user.py
from datetime import datetime
from typing import Optional

from pydantic import Field

from app.schemas.base import ApiModel, MediaUrl


class UserSummary(ApiModel):
    """Minimal user info embedded in posts and comments"""

    id: int
    name: str
    image: Optional[str] = None


class UserCard(UserSummary):
    """User info shown in follower/following lists"""

    bio: Optional[str] = None


class UserResponse(ApiModel):
    id: int
    name: str
    # Only populated when the caller is looking at their own profile
    email: Optional[str] = None
    image: Optional[str] = None
    bio: Optional[str] = None
    created_at: datetime

    posts_count: int = 0
    followers_count: int = 0
    following_count: int = 0


class UserUpdate(ApiModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    bio: Optional[str] = Field(None, max_length=500)
    image: MediaUrl = None
