"""
Models package initialization
Import all models and setup relationships
"""

from .comment import Comment
from .comment_like import CommentLike
from .follow import Follow
from .like import Like
from .post import Post

# Import and setup relationships
from .relations import setup_relationships
from .report import Report
from .user import User

# Setup all relationships after models are imported
setup_relationships()

# Make models available at package level
__all__ = [
    "Comment",
    "CommentLike",
    "Follow",
    "Like",
    "Post",
    "Report",
    "User",
]
