"""User-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .validators import check_id, check_length, check_url, starts_with_digit

USERNAME_LENGTH_MESSAGE = "Username must contain between 3 and 16 characters"
PASSWORD_LENGTH_MESSAGE = "Password must contain between 3 and 16 characters"


class RegisterRequest(BaseModel):
    """Schema for account registration."""

    username: str | None = Field(None, validate_default=True, description="3-16 characters")
    password: str | None = Field(None, validate_default=True, description="3-16 characters")
    confirm_password: str | None = Field(
        None,
        validate_default=True,
        description="Must repeat the password",
    )

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: Any) -> str:
        username = check_length(v, USERNAME_LENGTH_MESSAGE, min_length=3, max_length=16)
        if starts_with_digit(username):
            raise ValueError("Username cannot start with a number")
        if "?" in username:
            raise ValueError("Username cannot contain a question mark")
        return username

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: Any) -> str:
        return check_length(v, PASSWORD_LENGTH_MESSAGE, min_length=3, max_length=16)

    @field_validator("confirm_password", mode="before")
    @classmethod
    def validate_confirm_password(cls, v: Any, info: ValidationInfo) -> str:
        confirmation = check_length(
            v,
            "Password confirmation must contain between 3 and 16 characters",
            min_length=3,
            max_length=16,
        )
        if confirmation != info.data.get("password"):
            raise ValueError("Passwords do not match")
        return confirmation


class LoginRequest(BaseModel):
    """Schema for login submissions."""

    username: str | None = Field(None, validate_default=True)
    password: str | None = Field(None, validate_default=True)

    @field_validator("username", mode="before")
    @classmethod
    def validate_username(cls, v: Any) -> str:
        return check_length(v, USERNAME_LENGTH_MESSAGE, min_length=3, max_length=16)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, v: Any) -> str:
        return check_length(v, PASSWORD_LENGTH_MESSAGE, min_length=3, max_length=16)


class LoginResponse(BaseModel):
    """Response returned after successful login."""

    access_token: str = Field(..., description="JWT access token")
    token_type: str = Field(..., description="Token type (always 'bearer')")


class ProfileUpdateRequest(BaseModel):
    """Schema for updating bio and/or avatar; omitted fields keep their value."""

    bio: str | None = None
    avatar: str | None = None

    @field_validator("bio", mode="before")
    @classmethod
    def validate_bio(cls, v: Any) -> str | None:
        if v is None:
            return v
        return check_length(v, "Bio cannot exceed 320 characters", max_length=320)

    @field_validator("avatar", mode="before")
    @classmethod
    def validate_avatar(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return check_url(v, "Avatar must be an URL")


class FollowUserRequest(BaseModel):
    """Target of a follow/unfollow toggle on another user."""

    user_id: int | None = Field(None, validate_default=True)

    @field_validator("user_id", mode="before")
    @classmethod
    def validate_user_id(cls, v: Any) -> int:
        return check_id(v, "User must be a valid ID")


class FollowCategoryRequest(BaseModel):
    """Target of a follow/unfollow toggle on a category."""

    category_id: int | None = Field(None, validate_default=True)

    @field_validator("category_id", mode="before")
    @classmethod
    def validate_category_id(cls, v: Any) -> int:
        return check_id(v, "Category must be a valid ID")


class UserSummary(BaseModel):
    """Partial user projection embedded in posts and comments."""

    id: int
    username: str
    avatar: str | None

    model_config = ConfigDict(from_attributes=True)


class UserResponse(BaseModel):
    """Full user profile; never includes the password hash."""

    id: int
    username: str
    registered_at: datetime
    bio: str
    avatar: str | None
    followed_users: list[int] = Field(default_factory=list)
    followed_categories: list[int] = Field(default_factory=list)

    model_config = ConfigDict(from_attributes=True)


class UserWithStats(UserResponse):
    """User profile enriched with read-time activity counts."""

    posts_count: int
    post_likes_count: int
    post_dislikes_count: int
    comments_count: int
    comment_likes_count: int
    comment_dislikes_count: int
    followers_count: int
