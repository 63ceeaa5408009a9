"""Read-time counts joined onto users and categories.

All counts for one entity are independent scalar sub-queries of a single
``SELECT`` so they are evaluated in one round trip. Nothing is stored.
"""

from __future__ import annotations

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from aurora.models import Category, CategoryFollow, Comment, CommentReaction, Post, PostReaction, User, UserFollow
from aurora.models.reaction import DISLIKE, LIKE
from aurora.schemas.category import CategoryResponse, CategoryWithStats
from aurora.schemas.user import UserWithStats

from .accounts import build_profile


def _count(model, *criteria):
    return select(func.count()).select_from(model).where(*criteria).scalar_subquery()


def user_counts(db: Session, user_id: int) -> dict[str, int]:
    """Return the seven activity counts for a user."""
    row = db.execute(
        select(
            _count(Post, Post.author_id == user_id).label("posts_count"),
            _count(PostReaction, PostReaction.user_id == user_id, PostReaction.direction == LIKE)
            .label("post_likes_count"),
            _count(PostReaction, PostReaction.user_id == user_id, PostReaction.direction == DISLIKE)
            .label("post_dislikes_count"),
            _count(Comment, Comment.author_id == user_id).label("comments_count"),
            _count(CommentReaction, CommentReaction.user_id == user_id, CommentReaction.direction == LIKE)
            .label("comment_likes_count"),
            _count(CommentReaction, CommentReaction.user_id == user_id, CommentReaction.direction == DISLIKE)
            .label("comment_dislikes_count"),
            _count(UserFollow, UserFollow.followed_id == user_id).label("followers_count"),
        )
    ).one()
    return {key: int(value or 0) for key, value in row._mapping.items()}


def category_counts(db: Session, category_id: int) -> dict[str, int]:
    """Return the post and follower counts for a category."""
    row = db.execute(
        select(
            _count(Post, Post.category_id == category_id).label("posts_count"),
            _count(CategoryFollow, CategoryFollow.category_id == category_id).label("followers_count"),
        )
    ).one()
    return {key: int(value or 0) for key, value in row._mapping.items()}


def enrich_user(db: Session, user: User) -> UserWithStats:
    """Return the user's profile merged with its activity counts."""
    profile = build_profile(db, user)
    return UserWithStats(**profile.model_dump(), **user_counts(db, user.id))


def enrich_category(db: Session, category: Category) -> CategoryWithStats:
    """Return the category merged with its post and follower counts."""
    base = CategoryResponse.model_validate(category)
    return CategoryWithStats(**base.model_dump(), **category_counts(db, category.id))
