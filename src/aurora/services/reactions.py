"""Like/dislike toggling for posts and comments.

Each (entity, user) pair is in one of three states: no reaction, liked or
disliked. A reaction is a single row keyed by the pair, so likes and
dislikes can never overlap. Transitions are issued as single statements
(delete, then update, then insert) instead of rewriting whole sets, which
keeps concurrent reactions from different users independent.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Literal

from sqlalchemy import delete, exists, insert, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from aurora.models import Comment, CommentReaction, Post, PostReaction, User
from aurora.models.reaction import DISLIKE, LIKE

from .errors import ReferenceIntegrityError

logger = logging.getLogger(__name__)

ReactionStatus = Literal["liked", "unliked", "disliked", "undisliked"]


class Direction(int, Enum):
    """Reaction direction as stored in the ``direction`` column."""

    LIKE = LIKE
    DISLIKE = DISLIKE

    @property
    def verb(self) -> str:
        return "like" if self is Direction.LIKE else "dislike"


@dataclass(frozen=True)
class ReactionTarget:
    """Describes one kind of reactable entity and its reaction table."""

    label: str
    noun: str
    entity_model: type[Post] | type[Comment]
    reaction_model: type[PostReaction] | type[CommentReaction]
    key_column: str

    def key(self):
        return getattr(self.reaction_model, self.key_column)


POST_TARGET = ReactionTarget(
    label="Post",
    noun="a post",
    entity_model=Post,
    reaction_model=PostReaction,
    key_column="post_id",
)
COMMENT_TARGET = ReactionTarget(
    label="Comment",
    noun="a post comment",
    entity_model=Comment,
    reaction_model=CommentReaction,
    key_column="comment_id",
)


@dataclass(frozen=True)
class ReactionResult:
    """Outcome of a toggle as returned to the client."""

    status: ReactionStatus
    message: str


def _result(target: ReactionTarget, direction: Direction, reacted: bool) -> ReactionResult:
    verb = direction.verb
    status = f"{verb}d" if reacted else f"un{verb}d"
    return ReactionResult(status=status, message=f"{target.label} {status} successfully!")


def failure(target: ReactionTarget, direction: Direction) -> ReferenceIntegrityError:
    """Return the generic error shown when a reaction cannot be applied."""
    return ReferenceIntegrityError.while_doing(f"{direction.verb[:-1]}ing {target.noun}")


def react(
    db: Session,
    target: ReactionTarget,
    entity_id: int,
    user_id: int,
    direction: Direction,
) -> ReactionResult:
    """Toggle ``user_id``'s reaction on an entity in the given direction.

    Args:
        db: Active database session; committed on success.
        target: Which kind of entity is being reacted to.
        entity_id: Primary key of the post or comment.
        user_id: Acting user.
        direction: Like or dislike.

    Returns:
        ``reacted`` when the user now holds this reaction (an opposite one is
        replaced), ``un-reacted`` when an identical reaction was removed.

    Raises:
        ReferenceIntegrityError: The user or entity does not exist, or a
            concurrent identical insert won the race.
    """
    user_exists = db.scalar(select(exists().where(User.id == user_id)))
    entity_exists = db.scalar(select(exists().where(target.entity_model.id == entity_id)))
    if not user_exists or not entity_exists:
        raise failure(target, direction)

    model = target.reaction_model
    key = target.key()
    pair = (key == entity_id, model.user_id == user_id)

    removed = db.execute(delete(model).where(*pair, model.direction == direction.value))
    if removed.rowcount == 1:
        db.commit()
        logger.debug("User %s removed %s on %s %s", user_id, direction.verb, target.label, entity_id)
        return _result(target, direction, reacted=False)

    switched = db.execute(update(model).where(*pair).values(direction=direction.value))
    if switched.rowcount == 1:
        db.commit()
        logger.debug("User %s switched to %s on %s %s", user_id, direction.verb, target.label, entity_id)
        return _result(target, direction, reacted=True)

    try:
        db.execute(
            insert(model).values(
                {target.key_column: entity_id, "user_id": user_id, "direction": direction.value}
            )
        )
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning(
            "Rejected duplicate %s by user %s on %s %s", direction.verb, user_id, target.label, entity_id
        )
        raise failure(target, direction) from exc

    logger.debug("User %s added %s on %s %s", user_id, direction.verb, target.label, entity_id)
    return _result(target, direction, reacted=True)


def react_to_post(db: Session, slug: str, user_id: int, direction: Direction) -> ReactionResult:
    """Toggle a reaction on the post addressed by ``slug``."""
    post_id = db.scalar(select(Post.id).where(Post.slug == slug))
    if post_id is None:
        raise failure(POST_TARGET, direction)
    return react(db, POST_TARGET, post_id, user_id, direction)


def react_to_comment(db: Session, comment_id: int, user_id: int, direction: Direction) -> ReactionResult:
    """Toggle a reaction on a comment."""
    return react(db, COMMENT_TARGET, comment_id, user_id, direction)


def reaction_of(db: Session, target: ReactionTarget, entity_id: int, user_id: int) -> Direction | None:
    """Return the user's current reaction on an entity, if any."""
    model = target.reaction_model
    value = db.scalar(
        select(model.direction).where(target.key() == entity_id, model.user_id == user_id)
    )
    return None if value is None else Direction(value)


def add_author_like(db: Session, target: ReactionTarget, entity_id: int, author_id: int) -> None:
    """Stage the author's own like on a freshly created entity; the caller commits."""
    db.add(target.reaction_model(**{target.key_column: entity_id, "user_id": author_id, "direction": LIKE}))
