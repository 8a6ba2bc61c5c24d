"""
profile.py — Response Schema for the Profile Overview

Each section carries its own `error` so one failed sub-fetch does not blank
out the whole page.
"""

from __future__ import annotations

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from app.schemas.review import ReviewOut
from app.schemas.spot import SpotOut


class ProfileOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None
    bio: Optional[str] = None
    is_fallback: bool = False


class SpotSection(BaseModel):
    items: List[SpotOut] = Field(default_factory=list)
    error: Optional[str] = None


class ReviewSection(BaseModel):
    items: List[ReviewOut] = Field(default_factory=list)
    error: Optional[str] = None


class ProfileOverviewOut(BaseModel):
    user_id: str
    email: Optional[str] = None
    profile: ProfileOut
    profile_error: Optional[str] = None
    spots: SpotSection
    saved_spots: SpotSection
    reviews: ReviewSection
