"""Registration, login and profile management."""

from __future__ import annotations

import logging
import secrets
from collections.abc import Sequence

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from aurora.core import security
from aurora.core.settings import settings
from aurora.models import CategoryFollow, User, UserFollow
from aurora.schemas.user import LoginResponse, ProfileUpdateRequest, RegisterRequest, UserResponse

from .blob_store import BlobStore
from .content import ImageUpload, ensure_supported_image
from .errors import AuthenticationError, ReferenceIntegrityError, ValidationFailed

logger = logging.getLogger(__name__)

AVATARS_FOLDER = "avatars"
USERNAME_TAKEN_MESSAGE = "Username already taken"
INVALID_CREDENTIALS_MESSAGE = "Invalid username and/or password"

__all__ = [
    "authenticate",
    "build_profile",
    "find_by_username",
    "list_users",
    "register",
    "update_profile",
]


def find_by_username(db: Session, username: str) -> User | None:
    """Return the user whose username matches ignoring case."""
    return db.scalar(select(User).where(func.lower(User.username) == username.strip().lower()))


def build_profile(db: Session, user: User) -> UserResponse:
    """Project a user with its follow lists; the password hash is never included."""
    followed_users = db.scalars(
        select(UserFollow.followed_id)
        .where(UserFollow.follower_id == user.id)
        .order_by(UserFollow.created_at, UserFollow.followed_id)
    ).all()
    followed_categories = db.scalars(
        select(CategoryFollow.category_id)
        .where(CategoryFollow.user_id == user.id)
        .order_by(CategoryFollow.created_at, CategoryFollow.category_id)
    ).all()
    return UserResponse(
        id=user.id,
        username=user.username,
        registered_at=user.registered_at,
        bio=user.bio,
        avatar=user.avatar,
        followed_users=list(followed_users),
        followed_categories=list(followed_categories),
    )


def list_users(db: Session) -> list[UserResponse]:
    """Return every user ordered by username."""
    users: Sequence[User] = db.scalars(select(User).order_by(func.lower(User.username))).all()
    return [build_profile(db, user) for user in users]


def register(db: Session, payload: RegisterRequest) -> User:
    """Create an account with a random default avatar and an empty bio.

    Raises:
        ValidationFailed: The username is already taken (ignoring case).
    """
    if find_by_username(db, payload.username) is not None:
        raise ValidationFailed(USERNAME_TAKEN_MESSAGE)

    user = User(
        username=payload.username,
        password_hash=security.hash_password(payload.password),
        bio="",
        avatar=secrets.choice(settings.default_avatars) if settings.default_avatars else None,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        logger.warning("Rejected duplicate registration for %s", payload.username)
        raise ValidationFailed(USERNAME_TAKEN_MESSAGE) from exc

    db.refresh(user)
    logger.info("Registered user %s (id=%s)", user.username, user.id)
    return user


def authenticate(db: Session, username: str, password: str) -> LoginResponse:
    """Verify credentials and issue a bearer token.

    Raises:
        AuthenticationError: Unknown username or wrong password; both give the same message.
    """
    user = find_by_username(db, username)
    if user is None or not security.verify_password(password, user.password_hash):
        raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)
    token = security.create_access_token(user.id)
    return LoginResponse(access_token=token, token_type="bearer")


async def update_profile(
    db: Session,
    user: User,
    payload: ProfileUpdateRequest,
    *,
    avatar_upload: ImageUpload | None = None,
    blob_store: BlobStore,
) -> UserResponse:
    """Update bio and/or avatar; an uploaded avatar wins over an avatar URL."""
    db_user = db.get(User, user.id)
    if db_user is None:
        raise ReferenceIntegrityError.while_doing("updating the user")

    if payload.bio is not None:
        db_user.bio = payload.bio

    if avatar_upload is not None:
        mime = ensure_supported_image(avatar_upload.mime_type, len(avatar_upload.data))
        db_user.avatar = await blob_store.put(
            avatar_upload.data,
            folder=AVATARS_FOLDER,
            mime_type=mime,
            filename=avatar_upload.filename,
        )
    elif payload.avatar is not None:
        db_user.avatar = payload.avatar

    db.commit()
    db.refresh(db_user)
    logger.info("Updated profile of user %s", db_user.id)
    return build_profile(db, db_user)
