# src/aurora/schemas/reaction.py
"""Reaction-related Pydantic schemas."""

from typing import Any, Literal

from pydantic import BaseModel, Field, field_validator

from .validators import check_id


class ReactionRequest(BaseModel):
    """Schema for liking or disliking a post or comment."""

    user: int | None = Field(None, validate_default=True, description="Acting user ID")

    @field_validator("user", mode="before")
    @classmethod
    def validate_user(cls, v: Any) -> int:
        return check_id(v, "User field must be a valid ID")


class ReactionResponse(BaseModel):
    """Outcome of a reaction toggle."""

    status: Literal["liked", "unliked", "disliked", "undisliked"]
    message: str
