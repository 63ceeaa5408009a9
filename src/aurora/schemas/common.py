"""Shared Pydantic schemas for common API elements."""
from __future__ import annotations

from pydantic import BaseModel, Field


class MessageResponse(BaseModel):
    """Plain confirmation returned by creation endpoints."""

    message: str = Field(..., description="Human-readable outcome")
