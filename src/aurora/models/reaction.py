# src/aurora/models/reaction.py
"""Models capturing like/dislike reactions on posts and comments."""

from sqlalchemy import CheckConstraint, ForeignKey, Index, Integer, SmallInteger
from sqlalchemy.orm import Mapped, mapped_column

from aurora.db.session import Base

LIKE = 1
DISLIKE = -1


class PostReaction(Base):
    """Per-user reaction on a post.

    The composite primary key allows at most one reaction per (post, user),
    so a user can never appear among both the likes and the dislikes.
    """

    __tablename__ = "post_reaction"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_post_reaction_direction"),
        Index("ix_post_reaction_user_id", "user_id"),
    )

    post_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("post.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # 1 = like, -1 = dislike.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)


class CommentReaction(Base):
    """Per-user reaction on a comment."""

    __tablename__ = "comment_reaction"
    __table_args__ = (
        CheckConstraint("direction IN (1, -1)", name="ck_comment_reaction_direction"),
        Index("ix_comment_reaction_user_id", "user_id"),
    )

    comment_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("comment.id", ondelete="CASCADE"),
        primary_key=True,
    )
    user_id: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("user_account.id", ondelete="CASCADE"),
        primary_key=True,
    )

    # 1 = like, -1 = dislike.
    direction: Mapped[int] = mapped_column(SmallInteger, nullable=False)
