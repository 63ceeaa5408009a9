# src/aurora/models/post.py
"""SQLAlchemy models for posts and related attributes."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.session import Base
from aurora.db.time import utcnow


class Post(Base):
    """Primary content entity produced by users.

    ``content`` holds the normalised, render-ready fragment: sanitised HTML for
    text posts, an ``<img>`` tag for image posts and an ``<iframe>`` for video
    posts. Reactions live in :class:`aurora.models.reaction.PostReaction`.
    """

    __tablename__ = "post"
    __table_args__ = (
        Index("ix_post_author_id", "author_id"),
        Index("ix_post_category_id", "category_id"),
        Index("ix_post_created_at", "created_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    author_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id"),
        nullable=False,
    )
    category_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("category.id"),
        nullable=False,
    )
    title: Mapped[str] = mapped_column(Text, nullable=False)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    # Title slug plus a random suffix; unique in practice without a lookup.
    slug: Mapped[str] = mapped_column(Text, unique=True, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), nullable=False, default=utcnow
    )
