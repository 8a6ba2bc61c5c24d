"""
reviews.py — Spot Review Ledger

Reviews are append-only here: create and list. The same author may review
a spot more than once.
"""

from __future__ import annotations

from typing import List, Optional

from app.core.errors import NotFound
from app.core.logging import get_logger
from app.models.review import Review
from app.models.user import AuthenticatedUser
from app.schemas.review import ReviewCreate
from app.services.db_client import SupabaseDBClient

logger = get_logger(__name__)


def create_review(
    spot_id: int,
    payload: ReviewCreate,
    author: AuthenticatedUser,
    db: SupabaseDBClient,
) -> Review:
    if db.get_spot(spot_id) is None:
        raise NotFound("Spot not found.")

    row = db.insert_review(
        {
            "spot_id": spot_id,
            "user_id": author.id,
            "rating": payload.rating,
            "comment": payload.comment,
        }
    )
    # Re-read so the author's profile fields come back embedded
    stored = db.get_review(row["id"]) or row
    logger.info("User %s reviewed spot %s (rating %s)", author.id, spot_id, payload.rating)
    return Review.from_row(stored)


def list_reviews(spot_id: int, db: SupabaseDBClient) -> List[Review]:
    """Newest first."""
    return [Review.from_row(row) for row in db.list_reviews_for_spot(spot_id)]


def list_user_reviews(user: AuthenticatedUser, db: SupabaseDBClient, limit: Optional[int] = None) -> List[Review]:
    return [Review.from_row(row) for row in db.list_reviews_by_author(user.id, limit=limit)]
