# src/aurora/models/user.py
"""SQLAlchemy models for user accounts and follow edges."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import CheckConstraint, DateTime, ForeignKey, Index, Integer, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.session import Base
from aurora.db.time import utcnow


class User(Base):
    """Registered account with a public profile."""

    __tablename__ = "user_account"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    username: Mapped[str] = mapped_column(Text, nullable=False)
    password_hash: Mapped[str] = mapped_column(Text, nullable=False)
    registered_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
    bio: Mapped[str] = mapped_column(Text, nullable=False, default="")
    # Either a remote URL or a blob store URL for an uploaded avatar.
    avatar: Mapped[str | None] = mapped_column(Text, nullable=True)


# Usernames are unique regardless of case.
Index("ux_user_account_username_lower", func.lower(User.username), unique=True)


class UserFollow(Base):
    """Unilateral follow edge from one user to another."""

    __tablename__ = "user_follow"
    __table_args__ = (
        CheckConstraint("follower_id <> followed_id", name="ck_user_follow_not_self"),
        Index("ix_user_follow_followed_id", "followed_id"),
    )

    follower_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    followed_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )


class CategoryFollow(Base):
    """Follow edge from a user to a category."""

    __tablename__ = "category_follow"
    __table_args__ = (Index("ix_category_follow_category_id", "category_id"),)

    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("category.id", ondelete="CASCADE"),
        primary_key=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
