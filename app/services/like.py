# app/services/like.py
import logging
from typing import Optional

from sqlalchemy import and_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from app.models.comment import Comment
from app.models.comment_like import CommentLike
from app.models.like import Like
from app.models.post import Post

logger = logging.getLogger(__name__)


class LikeService:
    def __init__(self, db: Session):
        self.db = db

    def _toggle(self, existing, new_like) -> dict:
        """
        Remove `existing` if present, otherwise insert `new_like`.

        No lock is taken: when a concurrent request inserts the same pair first,
        the unique constraint rejects ours and the pair is already liked.
        """
        if existing:
            self.db.delete(existing)
            self.db.commit()
            return {"liked": False}

        self.db.add(new_like)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Concurrent like detected for {new_like!r}")

        return {"liked": True}

    def toggle_post_like(self, post_id: int, user_id: int) -> Optional[dict]:
        """Like or unlike a live post"""
        post = (
            self.db.query(Post)
            .filter(and_(Post.id == post_id, Post.deleted_at.is_(None)))
            .first()
        )
        if not post:
            return None

        existing = (
            self.db.query(Like)
            .filter(and_(Like.post_id == post_id, Like.user_id == user_id))
            .first()
        )
        return self._toggle(existing, Like(post_id=post_id, user_id=user_id))

    def toggle_comment_like(self, comment_id: int, user_id: int) -> Optional[dict]:
        """Like or unlike a live comment"""
        comment = (
            self.db.query(Comment)
            .filter(and_(Comment.id == comment_id, Comment.deleted_at.is_(None)))
            .first()
        )
        if not comment:
            return None

        existing = (
            self.db.query(CommentLike)
            .filter(
                and_(
                    CommentLike.comment_id == comment_id,
                    CommentLike.user_id == user_id,
                )
            )
            .first()
        )
        return self._toggle(
            existing, CommentLike(comment_id=comment_id, user_id=user_id)
        )
