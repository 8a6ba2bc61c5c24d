"""
review.py — Request / Response Schemas for Spot Reviews

`rating` is strict: an integer 1-5. Floats (1.5), numeric strings ("5")
and booleans are rejected rather than coerced.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class ReviewCreate(BaseModel):
    rating: int = Field(..., ge=1, le=5, strict=True)
    comment: str = Field(..., strict=True)

    @field_validator("comment")
    @classmethod
    def comment_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("Comment cannot be empty.")
        return v.strip()


class ReviewAuthorOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    spot_id: int
    author_id: str
    rating: int
    comment: str
    created_at: Optional[datetime] = None
    author: Optional[ReviewAuthorOut] = None
