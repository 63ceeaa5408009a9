# src/aurora/schemas/__init__.py
"""
Pydantic schemas for API request/response models.

These schemas define the structure of API data for serialization and validation.
"""

from .category import CategoryCreate, CategoryResponse, CategorySummary, CategoryWithStats
from .comment import CommentCreate, CommentResponse
from .common import MessageResponse
from .post import PostCreate, PostDetail, PostFilter, PostListParams, PostSummary, PostType
from .reaction import ReactionRequest, ReactionResponse
from .user import (
    FollowCategoryRequest,
    FollowUserRequest,
    LoginRequest,
    LoginResponse,
    ProfileUpdateRequest,
    RegisterRequest,
    UserResponse,
    UserSummary,
    UserWithStats,
)

__all__ = [
    "CategoryCreate", "CategoryResponse", "CategorySummary", "CategoryWithStats",
    "CommentCreate", "CommentResponse",
    "MessageResponse",
    "PostCreate", "PostDetail", "PostFilter", "PostListParams", "PostSummary", "PostType",
    "ReactionRequest", "ReactionResponse",
    "FollowCategoryRequest", "FollowUserRequest", "LoginRequest", "LoginResponse",
    "ProfileUpdateRequest", "RegisterRequest", "UserResponse", "UserSummary", "UserWithStats",
]
