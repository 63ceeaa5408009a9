"""Shared API dependencies for authentication and common functionality."""

from typing import Annotated

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from aurora.core.security import decode_access_token
from aurora.db.session import get_db
from aurora.models import User
from aurora.services.blob_store import BlobStore, get_blob_store
from aurora.services.errors import AuthenticationError
from aurora.services.image_fetch import ImageFetcher, get_image_fetcher

# HTTP Bearer scheme for JWT authentication; missing tokens are reported as 401 below
bearer_scheme = HTTPBearer(auto_error=False)

UNAUTHORIZED_MESSAGE = "Unauthorized"

# Type alias for database session dependency
SessionDep = Annotated[Session, Depends(get_db)]


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    db: SessionDep,
) -> User:
    """Get the current authenticated user from the bearer token.

    Args:
        credentials: HTTP Bearer token credentials, if any were sent
        db: Database session

    Returns:
        User object for the authenticated user

    Raises:
        AuthenticationError: If the token is missing, invalid, expired, or
            names a user that no longer exists
    """
    if credentials is None:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)

    user_id = decode_access_token(credentials.credentials)
    if user_id is None:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)

    user = db.get(User, user_id)
    if user is None:
        raise AuthenticationError(UNAUTHORIZED_MESSAGE)
    return user


def get_blob_store_dep() -> BlobStore:
    """Return the configured blob store."""
    return get_blob_store()


def get_image_fetcher_dep() -> ImageFetcher:
    """Return the configured remote image fetcher."""
    return get_image_fetcher()


CurrentUserDep = Annotated[User, Depends(get_current_user)]
BlobStoreDep = Annotated[BlobStore, Depends(get_blob_store_dep)]
ImageFetcherDep = Annotated[ImageFetcher, Depends(get_image_fetcher_dep)]
