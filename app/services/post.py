# app/services/post.py
import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from sqlalchemy import and_, func, or_
from sqlalchemy.orm import Session, selectinload

from app.core.decorator import db_exception
from app.models.comment import Comment
from app.models.like import Like
from app.models.post import Post
from app.schemas.post import PostCreate, PostResponse, PostUpdate
from app.utils.pagination import PageParams, paginate
from app.utils.storage import StorageService

logger = logging.getLogger(__name__)


class PostService:
    def __init__(self, db: Session, storage: StorageService):
        self.db = db
        self.storage = storage

    def _visible_posts(self):
        return (
            self.db.query(Post)
            .filter(Post.deleted_at.is_(None))
            .options(selectinload(Post.author))
        )

    def _owned_post(self, post_id: int, user_id: int) -> Optional[Post]:
        """Fetch a live post only if it belongs to the caller."""
        return (
            self.db.query(Post)
            .filter(
                and_(
                    Post.id == post_id,
                    Post.author_id == user_id,
                    Post.deleted_at.is_(None),
                )
            )
            .first()
        )

    def _attach_stats(self, posts: List[Post], user_id: Optional[int]) -> None:
        """Set like/comment counts and the caller's flags on each post."""
        if not posts:
            return

        post_ids = [post.id for post in posts]

        like_counts = dict(
            self.db.query(Like.post_id, func.count(Like.id))
            .filter(Like.post_id.in_(post_ids))
            .group_by(Like.post_id)
            .all()
        )
        comment_counts = dict(
            self.db.query(Comment.post_id, func.count(Comment.id))
            .filter(
                and_(
                    Comment.post_id.in_(post_ids),
                    Comment.deleted_at.is_(None),
                )
            )
            .group_by(Comment.post_id)
            .all()
        )

        liked_ids = set()
        if user_id is not None:
            liked_ids = {
                row.post_id
                for row in self.db.query(Like.post_id).filter(
                    and_(Like.post_id.in_(post_ids), Like.user_id == user_id)
                )
            }

        for post in posts:
            post.likes_count = like_counts.get(post.id, 0)
            post.comments_count = comment_counts.get(post.id, 0)
            post.is_liked = post.id in liked_ids
            post.is_owner = user_id is not None and post.author_id == user_id

    def to_response(self, post: Post) -> PostResponse:
        """Serialize a post, signing its image and its author's avatar."""
        response = PostResponse.model_validate(post)
        response.image = self.storage.ensure_accessible_url(response.image)
        response.author.image = self.storage.ensure_accessible_url(
            response.author.image
        )
        return response

    @db_exception
    def create_post(self, post_in: PostCreate, user_id: int) -> PostResponse:
        """Create a new post"""
        post = Post(
            title=post_in.title,
            content=post_in.content,
            image=post_in.image,
            author_id=user_id,
        )

        self.db.add(post)
        self.db.commit()
        self.db.refresh(post)

        logger.info(f"Post {post.id} created by user {user_id}")

        self._attach_stats([post], user_id)
        return self.to_response(post)

    def get_post(
        self, post_id: int, user_id: Optional[int] = None
    ) -> Optional[PostResponse]:
        """Get a live post by ID"""
        post = self._visible_posts().filter(Post.id == post_id).first()
        if not post:
            return None

        self._attach_stats([post], user_id)
        return self.to_response(post)

    def get_posts(
        self,
        params: PageParams,
        user_id: Optional[int] = None,
        author_id: Optional[int] = None,
        search: Optional[str] = None,
    ) -> Tuple[List[PostResponse], dict]:
        """Get the feed, newest first, optionally filtered by author or text"""
        query = self._visible_posts()

        if author_id is not None:
            query = query.filter(Post.author_id == author_id)

        if search:
            query = query.filter(
                or_(
                    Post.title.icontains(search, autoescape=True),
                    Post.content.icontains(search, autoescape=True),
                )
            )

        posts, pagination = paginate(
            query, params, Post.created_at.desc(), Post.id.desc()
        )

        self._attach_stats(posts, user_id)
        return [self.to_response(post) for post in posts], pagination

    @db_exception
    def update_post(
        self, post_id: int, post_in: PostUpdate, user_id: int
    ) -> Optional[PostResponse]:
        """Update a post (owner only)"""
        post = self._owned_post(post_id, user_id)
        if not post:
            return None

        changes = post_in.model_dump(exclude_unset=True)
        if changes.get("title"):
            post.title = changes["title"]
        if changes.get("content"):
            post.content = changes["content"]
        if "image" in changes:
            post.image = changes["image"]

        self.db.commit()
        self.db.refresh(post)

        self._attach_stats([post], user_id)
        return self.to_response(post)

    @db_exception
    def delete_post(self, post_id: int, user_id: int) -> bool:
        """Soft delete a post (owner only)"""
        post = self._owned_post(post_id, user_id)
        if not post:
            return False

        post.deleted_at = datetime.now(timezone.utc)
        self.db.commit()

        logger.info(f"Post {post_id} soft-deleted by user {user_id}")
        return True
