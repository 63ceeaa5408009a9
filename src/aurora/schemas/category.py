# src/aurora/schemas/category.py
"""Category-related Pydantic schemas."""

from datetime import datetime
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from aurora.services.slugs import category_slug, is_reserved_category_name

from .validators import check_length, check_url, starts_with_digit


class CategoryCreate(BaseModel):
    """Schema for creating a new category.

    Name availability depends on stored data and is checked by the
    authoring service after these field rules pass.
    """

    name: str | None = Field(None, validate_default=True, description="3-32 characters")
    description: str | None = Field(None, validate_default=True, description="3-320 characters")
    icon: str | None = Field(None, description="Icon URL; a default is used when omitted")

    @field_validator("name", mode="before")
    @classmethod
    def validate_name(cls, v: Any) -> str:
        name = check_length(
            v,
            "Category name must contain between 3 and 32 characters",
            min_length=3,
            max_length=32,
        )
        if starts_with_digit(name):
            raise ValueError("Category name cannot start with a number")
        if is_reserved_category_name(name):
            raise ValueError("Prohibited category name")
        if not category_slug(name):
            raise ValueError("Category name must contain at least one letter or number")
        return name

    @field_validator("description", mode="before")
    @classmethod
    def validate_description(cls, v: Any) -> str:
        return check_length(
            v,
            "Category description must contain between 3 and 320 characters",
            min_length=3,
            max_length=320,
        )

    @field_validator("icon", mode="before")
    @classmethod
    def validate_icon(cls, v: Any) -> str | None:
        if v is None or v == "":
            return None
        return check_url(v, "Icon must be an URL")


class CategorySummary(BaseModel):
    """Partial category projection embedded in posts."""

    id: int
    name: str
    slug: str

    model_config = ConfigDict(from_attributes=True)


class CategoryResponse(BaseModel):
    """Schema for category information returned by the API."""

    id: int
    name: str
    slug: str
    icon: str
    description: str
    created_at: datetime

    model_config = ConfigDict(from_attributes=True)


class CategoryWithStats(CategoryResponse):
    """Category enriched with read-time counts."""

    posts_count: int
    followers_count: int
