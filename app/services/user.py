# app/services/user.py
import logging
from typing import List, Optional, Tuple

from sqlalchemy import and_
from sqlalchemy.orm import Session

from app.core.decorator import db_exception
from app.models.follow import Follow
from app.models.post import Post
from app.models.user import User
from app.schemas.post import PostResponse
from app.schemas.user import UserResponse, UserUpdate
from app.services.post import PostService
from app.utils.pagination import PageParams
from app.utils.storage import StorageService

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage

    def get_user(self, user_id: int) -> Optional[User]:
        """
        Retrieves a single user by their ID.
        """
        return self.db.query(User).filter(User.id == user_id).first()

    def to_response(self, user: User, include_email: bool) -> UserResponse:
        """Build a profile with counts and a signed avatar URL."""
        response = UserResponse.model_validate(user)
        response.image = self.storage.ensure_accessible_url(response.image)
        if not include_email:
            response.email = None

        response.posts_count = (
            self.db.query(Post)
            .filter(and_(Post.author_id == user.id, Post.deleted_at.is_(None)))
            .count()
        )
        response.followers_count = (
            self.db.query(Follow).filter(Follow.following_id == user.id).count()
        )
        response.following_count = (
            self.db.query(Follow).filter(Follow.follower_id == user.id).count()
        )
        return response

    def get_user_profile(
        self, user_id: int, viewer_id: Optional[int] = None
    ) -> Optional[UserResponse]:
        """
        Get a public profile. The email is only exposed to its owner.
        """
        user = self.get_user(user_id)
        if not user:
            return None
        return self.to_response(user, include_email=viewer_id == user.id)

    @db_exception
    def update_user(self, user: User, user_in: UserUpdate) -> UserResponse:
        """
        Update the caller's own profile. Empty names are ignored; bio and image
        may be cleared with null.
        """
        changes = user_in.model_dump(exclude_unset=True)
        if changes.get("name"):
            user.name = changes["name"]
        if "bio" in changes:
            user.bio = changes["bio"]
        if "image" in changes:
            user.image = changes["image"]

        self.db.commit()
        self.db.refresh(user)

        logger.info(f"User {user.id} updated profile fields: {sorted(changes)}")
        return self.to_response(user, include_email=True)

    def get_user_posts(
        self,
        user_id: int,
        params: PageParams,
        viewer_id: Optional[int] = None,
    ) -> Tuple[List[PostResponse], dict]:
        """Posts written by `user_id`, newest first, flagged for the viewer"""
        post_service = PostService(self.db, self.storage)
        return post_service.get_posts(params, user_id=viewer_id, author_id=user_id)
