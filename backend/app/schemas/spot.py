"""
spot.py — Request / Response Schemas for Spot Endpoints

Request bodies are validated here, at the HTTP boundary, before any service
call. Create and update share the same per-field rules:

- name: non-empty after trimming.
- difficulty: Easy | Medium | Hard (empty string means unset).
- elevation_gain: finite number, or a numeric string; "" / null means unset.
- location: {"lat": .., "lng": ..} (or a JSON string of one) within
  geographic range; null means "not set yet".
"""

from __future__ import annotations

import json
import math
from datetime import datetime
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator

from app.models.spot import Difficulty, Location

# Fields a client may never send in an update patch
IMMUTABLE_SPOT_FIELDS = ("id", "owner_id", "user_id", "created_at")


class LocationIn(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lng: float = Field(..., ge=-180, le=180)

    @field_validator("lat", "lng", mode="before")
    @classmethod
    def must_be_number(cls, v: Any) -> Any:
        if isinstance(v, bool) or not isinstance(v, (int, float)):
            raise ValueError("Coordinate must be a number.")
        return v

    def to_location(self) -> Location:
        return Location(lat=self.lat, lng=self.lng)


class _SpotFields(BaseModel):
    """Per-field rules shared by create and update."""

    model_config = ConfigDict(extra="ignore")

    name: Optional[str] = None
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    elevation_gain: Optional[float] = None
    location: Optional[LocationIn] = None
    location_address: Optional[str] = Field(None, max_length=500)

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: Optional[str]) -> str:
        if v is None or not v.strip():
            raise ValueError("Name is required.")
        return v.strip()

    @field_validator("description", "location_address")
    @classmethod
    def strip_text(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return None
        return v.strip() or None

    @field_validator("difficulty", mode="before")
    @classmethod
    def blank_difficulty_is_unset(cls, v: Any) -> Any:
        if v == "":
            return None
        return v

    @field_validator("elevation_gain", mode="before")
    @classmethod
    def parse_elevation(cls, v: Any) -> Optional[float]:
        if v is None or v == "":
            return None
        if isinstance(v, bool):
            raise ValueError("Invalid elevation gain. Must be a number or empty.")
        if isinstance(v, str):
            try:
                v = float(v.strip())
            except ValueError:
                raise ValueError("Invalid elevation gain. Must be a number or empty.")
        if not isinstance(v, (int, float)) or not math.isfinite(v):
            raise ValueError("Invalid elevation gain. Must be a number or empty.")
        return float(v)

    @field_validator("location", mode="before")
    @classmethod
    def parse_location(cls, v: Any) -> Any:
        if isinstance(v, str):
            try:
                v = json.loads(v)
            except ValueError:
                raise ValueError("Invalid location JSON string.")
        if v is not None and not isinstance(v, dict):
            raise ValueError(
                "Invalid location format. Must be an object with lat and lng properties, "
                "a valid JSON string, or null."
            )
        return v

    def _row_value(self, field: str) -> Any:
        value = getattr(self, field)
        if field == "location":
            return value.to_location().to_json() if value is not None else None
        if field == "difficulty":
            return value.value if value is not None else None
        return value


class SpotCreate(_SpotFields):
    """
    Body of POST /api/spots.

    `user_id` is accepted so older clients keep working, but the owner is
    always the authenticated caller.
    """

    name: str
    user_id: Optional[str] = None

    def to_row(self, owner_id: str) -> Dict[str, Any]:
        row = {field: self._row_value(field) for field in _SpotFields.model_fields}
        row["user_id"] = owner_id
        return row


class SpotUpdate(_SpotFields):
    """Sparse patch for PUT /api/spots/{id}; only fields actually sent are applied."""

    @model_validator(mode="before")
    @classmethod
    def reject_immutable_fields(cls, data: Any) -> Any:
        if isinstance(data, dict):
            present = [f for f in IMMUTABLE_SPOT_FIELDS if f in data]
            if present:
                raise ValueError(f"Immutable field(s) cannot be updated: {', '.join(present)}")
        return data

    def changes(self) -> Dict[str, Any]:
        return {
            field: self._row_value(field)
            for field in _SpotFields.model_fields
            if field in self.model_fields_set
        }


class LocationOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    lat: float
    lng: float


class SpotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    owner_id: str
    name: str
    description: Optional[str] = None
    difficulty: Optional[Difficulty] = None
    elevation_gain: Optional[float] = None
    location: Optional[LocationOut] = None
    location_address: Optional[str] = None
    created_at: Optional[datetime] = None


class SavedSpotOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: Optional[int] = None
    user_id: str
    spot_id: int
    created_at: Optional[datetime] = None


class SaveResponse(BaseModel):
    message: str
    data: SavedSpotOut


class MessageResponse(BaseModel):
    message: str
