"""
spot.py — Record Type for Spots

Purpose:
- Represent a user-submitted, geotagged spot as stored in the `spots` table.
- Convert between Supabase rows and the typed record used by services.

Table columns:
    id, user_id, name, description, difficulty, elevation_gain,
    location (jsonb {"lat", "lng"}), location_address, created_at

Important Design Rules:
- `owner_id` (column `user_id`) is set once at creation and never reassigned.
- `location` may be absent: the spot exists but cannot be plotted.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import TypeAdapter


_TIMESTAMP = TypeAdapter(datetime)


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


@dataclass(frozen=True)
class Location:
    lat: float
    lng: float

    def to_json(self) -> Dict[str, float]:
        return {"lat": self.lat, "lng": self.lng}

    @classmethod
    def from_json(cls, value: Any) -> Optional["Location"]:
        # jsonb comes back as a dict; older rows were written as JSON text
        if value is None:
            return None
        if isinstance(value, str):
            value = json.loads(value)
        return cls(lat=float(value["lat"]), lng=float(value["lng"]))


@dataclass
class Spot:
    id: int
    owner_id: str
    name: str
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    elevation_gain: Optional[float] = None
    location: Optional[Location] = None
    location_address: Optional[str] = None
    created_at: Optional[datetime] = None

    @property
    def plottable(self) -> bool:
        return self.location is not None

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "Spot":
        elevation = row.get("elevation_gain")
        return cls(
            id=int(row["id"]),
            owner_id=str(row["user_id"]),
            name=row["name"],
            description=row.get("description"),
            difficulty=parse_difficulty(row.get("difficulty")),
            elevation_gain=float(elevation) if elevation is not None else None,
            location=Location.from_json(row.get("location")),
            location_address=row.get("location_address"),
            created_at=parse_timestamp(row.get("created_at")),
        )


def parse_difficulty(value: Optional[str]) -> Optional[Difficulty]:
    if not value:
        return None
    try:
        return Difficulty(value)
    except ValueError:
        return None


def parse_timestamp(value: Any) -> Optional[datetime]:
    """
    Parse a Postgres `timestamptz` as returned by PostgREST.

    Accepts trimmed fractions (".12345") and a "Z" suffix.
    """
    if value is None:
        return None
    return _TIMESTAMP.validate_python(value)
