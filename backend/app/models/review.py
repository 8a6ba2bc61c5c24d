"""
review.py — Record Type for Spot Reviews

Purpose:
- A rating (1-5) plus comment left by a user on a spot (`reviews` table).
- Carries the author's display fields when the `profiles` row is embedded.

Reviews are immutable once created and a user may review the same spot
more than once.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from app.models.spot import parse_timestamp


@dataclass
class ReviewAuthor:
    full_name: Optional[str] = None
    avatar_url: Optional[str] = None


@dataclass
class Review:
    id: int
    spot_id: int
    author_id: str
    rating: int
    comment: str
    created_at: Optional[datetime] = None
    author: Optional[ReviewAuthor] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Review":
        # PostgREST embeds a to-one relation as an object (or null)
        profile = row.get("profiles")
        author = None
        if isinstance(profile, dict):
            author = ReviewAuthor(
                full_name=profile.get("full_name"),
                avatar_url=profile.get("avatar_url"),
            )
        return cls(
            id=int(row["id"]),
            spot_id=int(row["spot_id"]),
            author_id=str(row["user_id"]),
            rating=int(row["rating"]),
            comment=row["comment"],
            created_at=parse_timestamp(row.get("created_at")),
            author=author,
        )
