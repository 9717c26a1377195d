# app/models/relations.py

from sqlalchemy.orm import relationship

from .comment import Comment
from .comment_like import CommentLike
from .follow import Follow
from .like import Like
from .post import Post
from .report import Report
from .user import User


def setup_relationships():
    """
    Configure all SQLAlchemy relationships between models.
    """

    # --- Content ---

    # 1. User to Posts (One-to-Many)
    User.posts = relationship("Post", back_populates="author")
    Post.author = relationship("User", back_populates="posts")

    # 2. Post to Comments (One-to-Many)
    Post.comments = relationship(
        "Comment",
        back_populates="post",
        order_by="Comment.created_at",
    )
    Comment.post = relationship("Post", back_populates="comments")

    # 3. User to Comments (One-to-Many)
    User.comments = relationship("Comment", back_populates="author")
    Comment.author = relationship("User", back_populates="comments")

    # --- Likes ---

    # 4. Post to Likes (One-to-Many)
    Post.likes = relationship(
        "Like", back_populates="post", cascade="all, delete-orphan"
    )
    Like.post = relationship("Post", back_populates="likes")
    Like.user = relationship("User")

    # 5. Comment to Likes (One-to-Many)
    Comment.likes = relationship(
        "CommentLike", back_populates="comment", cascade="all, delete-orphan"
    )
    CommentLike.comment = relationship("Comment", back_populates="likes")
    CommentLike.user = relationship("User")

    # --- Social graph ---

    # 6. Follow edges (both ends point at users)
    Follow.follower = relationship("User", foreign_keys=[Follow.follower_id])
    Follow.following = relationship("User", foreign_keys=[Follow.following_id])

    # --- Moderation ---

    # 7. Reports
    Report.post = relationship("Post")
    Report.comment = relationship("Comment")
    Report.reporter = relationship("User", foreign_keys=[Report.reporter_id])
    Report.reviewer = relationship("User", foreign_keys=[Report.reviewed_by])
