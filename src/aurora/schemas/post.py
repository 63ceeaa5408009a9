# src/aurora/schemas/post.py
"""Post-related Pydantic schemas."""

from __future__ import annotations

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator

from .category import CategorySummary
from .comment import CommentResponse
from .user import UserSummary
from .validators import check_id, check_length, parse_count, trimmed


class PostType(str, Enum):
    """Content kinds accepted by the ``type`` query parameter."""

    TEXT = "text"
    IMAGE = "image"
    VIDEO = "video"


class PostFilter(str, Enum):
    """Feed filters relative to the authenticated user."""

    CATEGORIES = "categories"
    FOLLOWING = "following"
    LIKED = "liked"
    YOURS = "yours"


def parse_post_type(value: Any) -> PostType:
    """Return the post type named by ``value`` or raise with the user-visible message."""
    try:
        return PostType(trimmed(value))
    except ValueError as err:
        raise ValueError("Invalid post type") from err


class PostCreate(BaseModel):
    """Schema for the form/JSON fields of a new post.

    ``content`` may be omitted only when the request carries an uploaded
    image; pass ``context={"has_upload": True}`` when validating such requests.
    """

    author: int | None = Field(None, validate_default=True)
    title: str | None = Field(None, validate_default=True, description="3-64 characters")
    content: str | None = Field(None, validate_default=True)
    category: int | None = Field(None, validate_default=True)

    @field_validator("author", mode="before")
    @classmethod
    def validate_author(cls, v: Any) -> int:
        return check_id(v, "Author field must be a valid ID")

    @field_validator("title", mode="before")
    @classmethod
    def validate_title(cls, v: Any) -> str:
        return check_length(
            v,
            "Post title must contain between 3 and 64 characters",
            min_length=3,
            max_length=64,
        )

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v: Any, info: ValidationInfo) -> str | None:
        if info.context and info.context.get("has_upload") and not trimmed(v):
            return None
        return check_length(v, "Post content must contain at least 8 characters", min_length=8)

    @field_validator("category", mode="before")
    @classmethod
    def validate_category(cls, v: Any) -> int:
        return check_id(v, "Category field must be a valid ID")


class PostListParams(BaseModel):
    """Query parameters accepted by the post listing endpoint."""

    limit: int | None = None
    skip: int | None = None
    filter: PostFilter | None = None
    category: str | None = None
    user: str | None = None

    @field_validator("limit", mode="before")
    @classmethod
    def validate_limit(cls, v: Any) -> int | None:
        return _optional_count(v, "Limit query parameter must be an integer")

    @field_validator("skip", mode="before")
    @classmethod
    def validate_skip(cls, v: Any) -> int | None:
        return _optional_count(v, "Skip query parameter must be an integer")

    @field_validator("filter", mode="before")
    @classmethod
    def validate_filter(cls, v: Any) -> PostFilter | None:
        if v is None:
            return None
        try:
            return PostFilter(trimmed(v))
        except ValueError as err:
            raise ValueError("Invalid filter query parameter") from err

    @field_validator("category", "user", mode="before")
    @classmethod
    def strip_lookup(cls, v: Any) -> str | None:
        return trimmed(v) or None


def _optional_count(value: Any, message: str) -> int | None:
    if value is None:
        return None
    count = parse_count(value)
    if count is None:
        raise ValueError(message)
    return count


class PostSummary(BaseModel):
    """Post as shown in listings; comments are identifiers in append order."""

    id: int
    title: str
    slug: str
    content: str
    created_at: datetime
    author: UserSummary
    category: CategorySummary
    likes: list[int]
    dislikes: list[int]
    comments: list[int]

    model_config = ConfigDict(from_attributes=True)


class PostDetail(BaseModel):
    """Single post with comments resolved newest-first."""

    id: int
    title: str
    slug: str
    content: str
    created_at: datetime
    author: UserSummary
    category: CategorySummary
    likes: list[int]
    dislikes: list[int]
    comments: list[CommentResponse]

    model_config = ConfigDict(from_attributes=True)
