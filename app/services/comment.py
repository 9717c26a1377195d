# app/services/comment.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import and_, func
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.comment import Comment
from app.models.comment_like import CommentLike
from app.models.post import Post
from app.schemas.comment import CommentCreate, CommentResponse, CommentUpdate
from app.utils.pagination import PageParams, paginate
from app.utils.storage import StorageService

logger = logging.getLogger(__name__)


class CommentService:
    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage

    def _live_post(self, post_id: int) -> Optional[Post]:
        return (
            self.db.query(Post)
            .filter(and_(Post.id == post_id, Post.deleted_at.is_(None)))
            .first()
        )

    def _owned_comment(self, comment_id: int, user_id: int) -> Optional[Comment]:
        return (
            self.db.query(Comment)
            .filter(
                and_(
                    Comment.id == comment_id,
                    Comment.author_id == user_id,
                    Comment.deleted_at.is_(None),
                )
            )
            .first()
        )

    def _attach_stats(self, comments: List[Comment], user_id: Optional[int]) -> None:
        if not comments:
            return

        comment_ids = [comment.id for comment in comments]

        like_counts = dict(
            self.db.query(CommentLike.comment_id, func.count(CommentLike.id))
            .filter(CommentLike.comment_id.in_(comment_ids))
            .group_by(CommentLike.comment_id)
            .all()
        )

        liked_ids = set()
        if user_id is not None:
            liked_ids = {
                row.comment_id
                for row in self.db.query(CommentLike.comment_id).filter(
                    and_(
                        CommentLike.comment_id.in_(comment_ids),
                        CommentLike.user_id == user_id,
                    )
                )
            }

        for comment in comments:
            comment.likes_count = like_counts.get(comment.id, 0)
            comment.is_liked = comment.id in liked_ids
            comment.is_owner = user_id is not None and comment.author_id == user_id

    def to_response(self, comment: Comment) -> CommentResponse:
        response = CommentResponse.model_validate(comment)
        response.author.image = self.storage.ensure_accessible_url(
            response.author.image
        )
        return response

    @db_exception
    def create_comment(
        self, post_id: int, comment_in: CommentCreate, user_id: int
    ) -> Optional[CommentResponse]:
        """Create a new comment on a live post"""
        if not self._live_post(post_id):
            return None

        comment = Comment(
            post_id=post_id,
            author_id=user_id,
            content=comment_in.content,
        )

        self.db.add(comment)
        self.db.commit()
        self.db.refresh(comment)

        self._attach_stats([comment], user_id)
        return self.to_response(comment)

    def get_comments(
        self,
        post_id: int,
        params: PageParams,
        user_id: Optional[int] = None,
    ) -> Optional[Tuple[List[CommentResponse], dict]]:
        """Get the comment thread of a post, oldest first"""
        if not self._live_post(post_id):
            return None

        query = (
            self.db.query(Comment)
            .filter(
                and_(
                    Comment.post_id == post_id,
                    Comment.deleted_at.is_(None),
                )
            )
            .options(selectinload(Comment.author))
        )

        comments, pagination = paginate(
            query, params, Comment.created_at.asc(), Comment.id.asc()
        )

        self._attach_stats(comments, user_id)
        return [self.to_response(comment) for comment in comments], pagination

    @db_exception
    def update_comment(
        self, comment_id: int, comment_in: CommentUpdate, user_id: int
    ) -> Optional[CommentResponse]:
        """Update a comment (owner only)"""
        comment = self._owned_comment(comment_id, user_id)
        if not comment:
            return None

        comment.content = comment_in.content

        self.db.commit()
        self.db.refresh(comment)

        self._attach_stats([comment], user_id)
        return self.to_response(comment)

    @db_exception
    def delete_comment(self, comment_id: int, user_id: int) -> bool:
        """Soft delete a comment (owner only)"""
        comment = self._owned_comment(comment_id, user_id)
        if not comment:
            return False

        comment.deleted_at = datetime.now(timezone.utc)
        self.db.commit()

        logger.info(f"Comment {comment_id} soft-deleted by user {user_id}")
        return True
