"""Follow/unfollow toggling between users and from users to categories."""

from __future__ import annotations

import logging
from enum import Enum

from sqlalchemy import delete, exists, insert, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from aurora.models import Category, CategoryFollow, User, UserFollow
from aurora.schemas.user import UserResponse

from .accounts import build_profile
from .errors import BusinessRuleError, ReferenceIntegrityError

logger = logging.getLogger(__name__)

SELF_FOLLOW_MESSAGE = "You cannot follow yourself"


class FollowKind(str, Enum):
    """What a follow edge points at."""

    USER = "user"
    CATEGORY = "category"


def _failure(kind: FollowKind) -> ReferenceIntegrityError:
    noun = "a user" if kind is FollowKind.USER else "a category"
    return ReferenceIntegrityError.while_doing(f"following/unfollowing {noun}")


def toggle_follow(db: Session, follower_id: int, kind: FollowKind, target_id: int) -> UserResponse:
    """Follow the target if not yet followed, otherwise unfollow it.

    Returns:
        The follower's profile reflecting the new state.

    Raises:
        BusinessRuleError: A user tried to follow themselves; nothing is changed.
        ReferenceIntegrityError: The follower or the target does not exist.
    """
    if kind is FollowKind.USER and target_id == follower_id:
        raise BusinessRuleError(SELF_FOLLOW_MESSAGE)

    follower = db.get(User, follower_id)
    if kind is FollowKind.USER:
        target_model, model = User, UserFollow
        pair = (UserFollow.follower_id == follower_id, UserFollow.followed_id == target_id)
        row = {"follower_id": follower_id, "followed_id": target_id}
    else:
        target_model, model = Category, CategoryFollow
        pair = (CategoryFollow.user_id == follower_id, CategoryFollow.category_id == target_id)
        row = {"user_id": follower_id, "category_id": target_id}

    target_exists = db.scalar(select(exists().where(target_model.id == target_id)))
    if follower is None or not target_exists:
        raise _failure(kind)

    removed = db.execute(delete(model).where(*pair))
    if removed.rowcount:
        db.commit()
        logger.debug("User %s unfollowed %s %s", follower_id, kind.value, target_id)
    else:
        try:
            db.execute(insert(model).values(row))
            db.commit()
        except IntegrityError as exc:
            db.rollback()
            logger.warning("Rejected duplicate follow of %s %s by %s", kind.value, target_id, follower_id)
            raise _failure(kind) from exc
        logger.debug("User %s followed %s %s", follower_id, kind.value, target_id)

    return build_profile(db, follower)
