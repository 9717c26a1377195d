# app/schemas/comment.py
from datetime import datetime
from typing import List

from pydantic import Field

from app.schemas.base import ApiModel, PaginationInfo
from app.schemas.user import UserSummary


class CommentCreate(ApiModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentUpdate(ApiModel):
    content: str = Field(..., min_length=1, max_length=2000)


class CommentResponse(ApiModel):
    id: int
    content: str
    post_id: int
    author_id: int
    created_at: datetime
    updated_at: datetime

    author: UserSummary

    likes_count: int = 0
    is_liked: bool = False
    is_owner: bool = False


class CommentListResponse(ApiModel):
    comments: List[CommentResponse]
    pagination: PaginationInfo
