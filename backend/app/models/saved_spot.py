"""
saved_spot.py — Record Type for Saved (Favorited) Spots

Purpose:
- Membership pair (user_id, spot_id) from the `saved_spots` table.
- Unique per pair; owned by the saving user, not by the spot's owner.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from app.models.spot import parse_timestamp


@dataclass
class SavedSpot:
    user_id: str
    spot_id: int
    id: Optional[int] = None
    created_at: Optional[datetime] = None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "SavedSpot":
        return cls(
            id=row.get("id"),
            user_id=str(row["user_id"]),
            spot_id=int(row["spot_id"]),
            created_at=parse_timestamp(row.get("created_at")),
        )
