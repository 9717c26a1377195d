# app/schemas/post.py
from datetime import datetime
from typing import List, Optional

from pydantic import Field

from app.schemas.base import ApiModel, MediaUrl, PaginationInfo
from app.schemas.user import UserSummary


class PostCreate(ApiModel):
    title: str = Field(..., min_length=1, max_length=200)
    content: str = Field(..., min_length=1, max_length=10000)
    image: MediaUrl = None


class PostUpdate(ApiModel):
    title: Optional[str] = Field(None, min_length=1, max_length=200)
    content: Optional[str] = Field(None, min_length=1, max_length=10000)
    image: MediaUrl = None


class PostResponse(ApiModel):
    id: int
    title: str
    content: str
    image: Optional[str] = None
    author_id: int
    created_at: datetime
    updated_at: datetime

    author: UserSummary

    likes_count: int = 0
    comments_count: int = 0

    # Caller interaction status
    is_liked: bool = False
    is_owner: bool = False


class PostListResponse(ApiModel):
    posts: List[PostResponse]
    pagination: PaginationInfo
