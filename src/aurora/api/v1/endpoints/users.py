"""User management endpoints for the Aurora API."""

from typing import Annotated

from fastapi import APIRouter, File, Form, UploadFile

from aurora.models import User
from aurora.schemas.common import MessageResponse
from aurora.schemas.user import (
    FollowCategoryRequest,
    FollowUserRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
    UserWithStats,
)
from aurora.services import accounts
from aurora.services.errors import PermissionDeniedError, ReferenceIntegrityError
from aurora.services.follows import FollowKind, toggle_follow
from aurora.services.stats import enrich_user

from ..dependencies import BlobStoreDep, CurrentUserDep, SessionDep
from ..payloads import JsonObjectDep, read_upload, submitted_fields, validate_model

router = APIRouter(prefix="/users", tags=["users"])

OWN_PROFILE_MESSAGE = "You can only update your own profile"


def _ensure_self(current_user: User, username: str) -> None:
    if current_user.username.lower() != username.strip().lower():
        raise PermissionDeniedError(OWN_PROFILE_MESSAGE)


@router.get("", response_model=list[UserResponse])
def list_users(db: SessionDep, current_user: CurrentUserDep) -> list[UserResponse]:
    """List every user ordered by username."""
    return accounts.list_users(db)


@router.post("", response_model=MessageResponse)
def register_user(payload: RegisterRequest, db: SessionDep) -> MessageResponse:
    """Create an account."""
    accounts.register(db, payload)
    return MessageResponse(message="User created successfully!")


@router.post("/login", response_model=LoginResponse)
def login(payload: LoginRequest, db: SessionDep) -> LoginResponse:
    """Exchange a username and password for a bearer token."""
    return accounts.authenticate(db, payload.username, payload.password)


@router.post("/auth", response_model=UserResponse)
def current_user_profile(db: SessionDep, current_user: CurrentUserDep) -> UserResponse:
    """Return the profile of the user the token belongs to."""
    return accounts.build_profile(db, current_user)


@router.get("/{username}", response_model=UserWithStats)
def get_user(username: str, db: SessionDep, current_user: CurrentUserDep) -> UserWithStats:
    """Return a user's profile with activity counts."""
    user = accounts.find_by_username(db, username)
    if user is None:
        raise ReferenceIntegrityError.while_doing("retrieving a user")
    return enrich_user(db, user)


@router.put("/{username}/update", response_model=UserResponse)
async def update_profile(
    username: str,
    db: SessionDep,
    current_user: CurrentUserDep,
    blob_store: BlobStoreDep,
    json_body: JsonObjectDep,
    bio: Annotated[str | None, Form()] = None,
    avatar: Annotated[str | None, Form()] = None,
    uploaded_avatar: Annotated[UploadFile | None, File()] = None,
) -> UserResponse:
    """Update bio and/or avatar; accepts JSON or a form with ``uploaded_avatar``."""
    _ensure_self(current_user, username)
    payload = validate_model(ProfileUpdateRequest, submitted_fields(json_body, bio=bio, avatar=avatar))
    avatar_upload = await read_upload(uploaded_avatar)
    return await accounts.update_profile(
        db,
        current_user,
        payload,
        avatar_upload=avatar_upload,
        blob_store=blob_store,
    )


@router.put("/{username}/update_user", response_model=UserResponse)
def toggle_user_follow(
    username: str,
    payload: FollowUserRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> UserResponse:
    """Follow or unfollow another user."""
    _ensure_self(current_user, username)
    return toggle_follow(db, current_user.id, FollowKind.USER, payload.user_id)


@router.put("/{username}/update_category", response_model=UserResponse)
def toggle_category_follow(
    username: str,
    payload: FollowCategoryRequest,
    db: SessionDep,
    current_user: CurrentUserDep,
) -> UserResponse:
    """Follow or unfollow a category."""
    _ensure_self(current_user, username)
    return toggle_follow(db, current_user.id, FollowKind.CATEGORY, payload.category_id)
