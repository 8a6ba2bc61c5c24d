"""
saved_spots.py — Save / Unsave / List Saved Spots

Semantics:
- save: the spot must exist. Saving twice never creates a second pair; the
  second call comes back with `created=False` so the API can answer 409.
- unsave: removing a pair that is already gone is a successful no-op.
- list: full spot records; pairs whose spot has been deleted are skipped.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from app.core.errors import NotFound
from app.core.logging import get_logger
from app.models.saved_spot import SavedSpot
from app.models.spot import Spot
from app.models.user import AuthenticatedUser
from app.services.db_client import DuplicateRecord, SupabaseDBClient

logger = get_logger(__name__)


@dataclass
class SaveResult:
    saved: SavedSpot
    created: bool


def save_spot(spot_id: int, user: AuthenticatedUser, db: SupabaseDBClient) -> SaveResult:
    if db.get_spot(spot_id) is None:
        raise NotFound("Spot not found.")

    existing = db.get_saved(user.id, spot_id)
    if existing is not None:
        return SaveResult(saved=SavedSpot.from_row(existing), created=False)

    try:
        row = db.insert_saved(user.id, spot_id)
    except DuplicateRecord:
        # A concurrent save won the race; the unique constraint kept one pair.
        logger.info("Spot %s already saved by %s (unique constraint)", spot_id, user.id)
        existing = db.get_saved(user.id, spot_id)
        saved = SavedSpot.from_row(existing) if existing else SavedSpot(user_id=user.id, spot_id=spot_id)
        return SaveResult(saved=saved, created=False)

    logger.info("User %s saved spot %s", user.id, spot_id)
    return SaveResult(saved=SavedSpot.from_row(row), created=True)


def unsave_spot(spot_id: int, user: AuthenticatedUser, db: SupabaseDBClient) -> bool:
    """Returns True when a pair was actually removed."""
    removed = bool(db.delete_saved(user.id, spot_id))
    if removed:
        logger.info("User %s unsaved spot %s", user.id, spot_id)
    return removed


def list_saved_spots(user: AuthenticatedUser, db: SupabaseDBClient, limit: Optional[int] = None) -> List[Spot]:
    spots = []
    for row in db.list_saved_with_spots(user.id, limit=limit):
        embedded = row.get("spots")
        if not embedded:
            logger.info("Skipping orphaned saved spot %s for user %s", row.get("spot_id"), user.id)
            continue
        spots.append(Spot.from_row(embedded))
    return spots
