# src/aurora/models/__init__.py
"""SQLAlchemy models for the Aurora application."""

from .category import Category
from .comment import Comment
from .post import Post
from .reaction import CommentReaction, PostReaction
from .user import CategoryFollow, User, UserFollow

__all__ = [
    "Category",
    "Comment",
    "Post",
    "CommentReaction", "PostReaction",
    "CategoryFollow", "User", "UserFollow",
]
