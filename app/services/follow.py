# app/services/follow.py
import logging
from typing import List, Tuple

from fastapi import HTTPException, status
from sqlalchemy import and_
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.follow import Follow
from app.models.user import User
from app.schemas.follow import FollowResponse
from app.schemas.user import UserCard
from app.utils.pagination import PageParams, paginate
from app.utils.storage import StorageService

logger = logging.getLogger(__name__)


class FollowService:
    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage

    def _get_follow(self, follower_id: int, following_id: int):
        return (
            self.db.query(Follow)
            .filter(
                and_(
                    Follow.follower_id == follower_id,
                    Follow.following_id == following_id,
                )
            )
            .first()
        )

    def _to_card(self, user: User) -> UserCard:
        card = UserCard.model_validate(user)
        card.image = self.storage.ensure_accessible_url(card.image)
        return card

    @db_exception
    def follow_user(self, follower_id: int, following_id: int) -> FollowResponse:
        """Start following another user"""
        if follower_id == following_id:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Cannot follow yourself",
            )

        user_to_follow = self.db.query(User).filter(User.id == following_id).first()
        if not user_to_follow:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        if self._get_follow(follower_id, following_id):
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Already following this user",
            )

        follow = Follow(follower_id=follower_id, following_id=following_id)
        self.db.add(follow)
        self.db.commit()
        self.db.refresh(follow)

        logger.info(f"User {follower_id} now follows user {following_id}")

        response = FollowResponse.model_validate(follow)
        response.following = self._to_card(follow.following)
        return response

    @db_exception
    def unfollow_user(self, follower_id: int, following_id: int) -> bool:
        """Stop following a user"""
        follow = self._get_follow(follower_id, following_id)
        if not follow:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="Not following this user",
            )

        self.db.delete(follow)
        self.db.commit()
        return True

    def get_followers(
        self, user_id: int, params: PageParams
    ) -> Tuple[List[UserCard], dict]:
        """Users following `user_id`, most recent first"""
        query = (
            self.db.query(Follow)
            .filter(Follow.following_id == user_id)
            .options(selectinload(Follow.follower))
        )
        follows, pagination = paginate(
            query, params, Follow.created_at.desc(), Follow.id.desc()
        )
        return [self._to_card(follow.follower) for follow in follows], pagination

    def get_following(
        self, user_id: int, params: PageParams
    ) -> Tuple[List[UserCard], dict]:
        """Users that `user_id` follows, most recent first"""
        query = (
            self.db.query(Follow)
            .filter(Follow.follower_id == user_id)
            .options(selectinload(Follow.following))
        )
        follows, pagination = paginate(
            query, params, Follow.created_at.desc(), Follow.id.desc()
        )
        return [self._to_card(follow.following) for follow in follows], pagination

    def is_following(self, follower_id: int, following_id: int) -> bool:
        return self._get_follow(follower_id, following_id) is not None
