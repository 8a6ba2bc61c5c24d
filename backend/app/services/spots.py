"""
spots.py — Spot Create / Read / Update / Delete

Ownership rules:
- The owner is the authenticated caller at creation time; a client-supplied
  `user_id` is ignored.
- Update and delete: existence first (NotFound), then ownership (Forbidden),
  then (update only) a non-empty patch, then a single conditional write
  scoped to `id AND user_id`. The write itself cannot touch a row the
  caller does not own, even if ownership changed between the read and the
  write.
- Delete must report exactly one removed row; a zero or missing count is
  never reported as success.

Every function takes the caller identity and the table wrapper explicitly.
"""

from __future__ import annotations

import math
from typing import List, Optional

from app.core.errors import Forbidden, NotFound, StoreUnavailable, ValidationFailed
from app.core.logging import get_logger
from app.models.spot import Difficulty, Spot
from app.models.user import AuthenticatedUser
from app.schemas.spot import SpotCreate, SpotUpdate
from app.services.db_client import SupabaseDBClient

logger = get_logger(__name__)


def create_spot(payload: SpotCreate, owner: AuthenticatedUser, db: SupabaseDBClient) -> Spot:
    if payload.user_id and payload.user_id != owner.id:
        logger.warning(
            "Ignoring client-supplied user_id %s on spot create; owner is %s",
            payload.user_id,
            owner.id,
        )
    created = db.insert_spot(payload.to_row(owner.id))
    spot = Spot.from_row(created)
    logger.info("Created spot %s for user %s", spot.id, owner.id)
    return spot


def get_spot(spot_id: int, db: SupabaseDBClient) -> Spot:
    row = db.get_spot(spot_id)
    if row is None:
        raise NotFound("Spot not found.")
    return Spot.from_row(row)


def list_spots(
    db: SupabaseDBClient,
    difficulty: Optional[Difficulty] = None,
    min_elevation: Optional[float] = None,
    max_elevation: Optional[float] = None,
) -> List[Spot]:
    """
    Public listing, newest first. Elevation bounds are inclusive; spots
    without an elevation never match a bound.
    """
    problems = {}
    for field, value in (("min_elevation", min_elevation), ("max_elevation", max_elevation)):
        if value is not None and not math.isfinite(value):
            problems[field] = "Must be a finite number."
    if not problems and min_elevation is not None and max_elevation is not None and min_elevation > max_elevation:
        problems["min_elevation"] = "Must not be greater than max_elevation."
    if problems:
        raise ValidationFailed("Invalid spot filter.", fields=problems)

    rows = db.list_spots(
        difficulty=difficulty.value if difficulty else None,
        min_elevation=min_elevation,
        max_elevation=max_elevation,
    )
    return [Spot.from_row(row) for row in rows]


def list_user_spots(owner: AuthenticatedUser, db: SupabaseDBClient, limit: Optional[int] = None) -> List[Spot]:
    return [Spot.from_row(row) for row in db.list_spots_by_owner(owner.id, limit=limit)]


def _require_owned_spot(spot_id: int, caller: AuthenticatedUser, db: SupabaseDBClient, action: str) -> Spot:
    spot = get_spot(spot_id, db)
    if spot.owner_id != caller.id:
        logger.warning(
            "User %s attempted to %s spot %s owned by %s",
            caller.id,
            action,
            spot_id,
            spot.owner_id,
        )
        raise Forbidden(f"User not authorized to {action} this spot.")
    return spot


def update_spot(spot_id: int, patch: SpotUpdate, caller: AuthenticatedUser, db: SupabaseDBClient) -> Spot:
    _require_owned_spot(spot_id, caller, db, "update")

    changes = patch.changes()
    if not changes:
        raise ValidationFailed("No valid fields provided for update.")

    updated = db.update_spot_if_owner(spot_id, caller.id, changes)
    if updated is None:
        # Row vanished (or changed hands) after the ownership check.
        logger.warning("Update of spot %s by %s matched no row", spot_id, caller.id)
        raise NotFound("Spot not found.")

    logger.info("Updated spot %s (%s) by user %s", spot_id, ", ".join(sorted(changes)), caller.id)
    return Spot.from_row(updated)


def delete_spot(spot_id: int, caller: AuthenticatedUser, db: SupabaseDBClient) -> None:
    _require_owned_spot(spot_id, caller, db, "delete")

    count = db.delete_spot_if_owner(spot_id, caller.id)
    if count is None:
        logger.error("Delete of spot %s by %s returned no row count", spot_id, caller.id)
        raise StoreUnavailable("Failed to delete spot. Uncertain outcome from database operation.")
    if count == 0:
        logger.warning(
            "Spot %s was not deleted for user %s (count 0); row gone or blocked by a row-level policy",
            spot_id,
            caller.id,
        )
        raise NotFound("Spot not found or user not authorized to delete this spot.")

    logger.info("Deleted spot %s by user %s", spot_id, caller.id)
