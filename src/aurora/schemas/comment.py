"""Comment-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .user import UserSummary
from .validators import check_id, check_length


class CommentCreate(BaseModel):
    """Schema for adding a comment to a post."""

    author: int | None = Field(None, validate_default=True)
    content: str | None = Field(None, validate_default=True, description="3-320 characters")

    @field_validator("author", mode="before")
    @classmethod
    def validate_author(cls, v: Any) -> int:
        return check_id(v, "Author field must be a valid ID")

    @field_validator("content", mode="before")
    @classmethod
    def validate_content(cls, v: Any) -> str:
        return check_length(
            v,
            "Comment content must contain between 3 and 320 characters",
            min_length=3,
            max_length=320,
        )


class CommentResponse(BaseModel):
    """Comment with its author resolved and reactions materialised."""

    id: int
    content: str
    created_at: datetime
    author: UserSummary
    likes: list[int]
    dislikes: list[int]

    model_config = ConfigDict(from_attributes=True)
