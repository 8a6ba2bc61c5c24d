"""
spots.py — Spot, Saved-Spot and Review Endpoints (API Layer)

Purpose:
- HTTP surface for the spot map:
    • POST   /spots                        → create (caller becomes owner)
    • GET    /spots                        → public listing (+ filters)
    • GET    /spots/{id}                   → single spot
    • PUT    /spots/{id}                   → sparse update (owner only)
    • DELETE /spots/{id}                   → delete (owner only)
    • POST   /spots/{id}/save              → favorite
    • DELETE /spots/{id}/unsave            → un-favorite
    • GET    /spots/users/me/saved-spots   → caller's favorites
    • GET    /spots/user/my-spots          → caller's own spots
    • GET    /spots/{id}/reviews           → reviews, newest first
    • POST   /spots/{id}/reviews           → add review

This file should be thin: resolve identity + validate the body, call the
service, shape the response. Errors are ServiceError subclasses and are
turned into the JSON error envelope by the handlers in main.py.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, status

from app.core.database import get_db
from app.core.errors import Conflict
from app.core.security import get_current_user
from app.models.spot import Difficulty
from app.models.user import AuthenticatedUser
from app.schemas.review import ReviewCreate, ReviewOut
from app.schemas.spot import (
    MessageResponse,
    SaveResponse,
    SavedSpotOut,
    SpotCreate,
    SpotOut,
    SpotUpdate,
)
from app.services import reviews as review_service
from app.services import saved_spots as saved_spot_service
from app.services import spots as spot_service
from app.services.db_client import SupabaseDBClient

router = APIRouter(
    prefix="/spots",
    tags=["spots"]
)


# -----------------------------------------------------------------------------
# Caller-scoped collections
# -----------------------------------------------------------------------------

@router.get("/users/me/saved-spots", response_model=List[SpotOut])
def list_saved_spots(
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    return saved_spot_service.list_saved_spots(user, db)


@router.get("/user/my-spots", response_model=List[SpotOut])
def list_my_spots(
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    return spot_service.list_user_spots(user, db)


# -----------------------------------------------------------------------------
# Spots
# -----------------------------------------------------------------------------

@router.post("", response_model=SpotOut, status_code=status.HTTP_201_CREATED)
def create_spot(
    payload: SpotCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    """
    POST /spots

    The owner is the bearer token's user; any `user_id` in the body is ignored.
    """
    return spot_service.create_spot(payload, user, db)


@router.get("", response_model=List[SpotOut])
def list_spots(
    difficulty: Optional[Difficulty] = None,
    min_elevation: Optional[float] = None,
    max_elevation: Optional[float] = None,
    db: SupabaseDBClient = Depends(get_db),
):
    return spot_service.list_spots(
        db,
        difficulty=difficulty,
        min_elevation=min_elevation,
        max_elevation=max_elevation,
    )


@router.get("/{spot_id}", response_model=SpotOut)
def get_spot(spot_id: int, db: SupabaseDBClient = Depends(get_db)):
    return spot_service.get_spot(spot_id, db)


@router.put("/{spot_id}", response_model=SpotOut)
def update_spot(
    spot_id: int,
    patch: SpotUpdate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    """
    PUT /spots/{spot_id}

    Order of checks: 401 (token) → 400 (malformed body) → 404 (exists)
    → 403 (owner) → 400 (empty patch).
    Nothing is written unless every check passes.
    """
    return spot_service.update_spot(spot_id, patch, user, db)


@router.delete("/{spot_id}", response_model=MessageResponse)
def delete_spot(
    spot_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    spot_service.delete_spot(spot_id, user, db)
    return MessageResponse(message="Spot deleted successfully")


# -----------------------------------------------------------------------------
# Saved spots
# -----------------------------------------------------------------------------

@router.post("/{spot_id}/save", response_model=SaveResponse, status_code=status.HTTP_201_CREATED)
def save_spot(
    spot_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    result = saved_spot_service.save_spot(spot_id, user, db)
    if not result.created:
        raise Conflict("Spot already saved.")
    return SaveResponse(
        message="Spot saved successfully!",
        data=SavedSpotOut.model_validate(result.saved),
    )


@router.delete("/{spot_id}/unsave", response_model=MessageResponse)
def unsave_spot(
    spot_id: int,
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    saved_spot_service.unsave_spot(spot_id, user, db)
    return MessageResponse(message="Spot unsaved successfully!")


# -----------------------------------------------------------------------------
# Reviews
# -----------------------------------------------------------------------------

@router.get("/{spot_id}/reviews", response_model=List[ReviewOut])
def list_reviews(spot_id: int, db: SupabaseDBClient = Depends(get_db)):
    return review_service.list_reviews(spot_id, db)


@router.post("/{spot_id}/reviews", response_model=ReviewOut, status_code=status.HTTP_201_CREATED)
def create_review(
    spot_id: int,
    payload: ReviewCreate,
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    return review_service.create_review(spot_id, payload, user, db)
