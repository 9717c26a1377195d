# app/schemas/follow.py
from datetime import datetime
from typing import List

from app.schemas.base import ApiModel, PaginationInfo
from app.schemas.user import UserCard


class FollowResponse(ApiModel):
    id: int
    follower_id: int
    following_id: int
    created_at: datetime

    following: UserCard


class UnfollowResponse(ApiModel):
    success: bool


class FollowCheckResponse(ApiModel):
    is_following: bool


class FollowersListResponse(ApiModel):
    followers: List[UserCard]
    pagination: PaginationInfo


class FollowingListResponse(ApiModel):
    following: List[UserCard]
    pagination: PaginationInfo
