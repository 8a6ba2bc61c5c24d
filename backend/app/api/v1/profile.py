"""
profile.py — Profile Overview Endpoint

GET /profile/me → profile details, the caller's spots, saved spots and
reviews in one response. Each section reports its own error.
"""

from fastapi import APIRouter, Depends

from app.core.config import settings
from app.core.database import get_db
from app.core.security import get_current_user
from app.models.user import AuthenticatedUser
from app.schemas.profile import ProfileOut, ProfileOverviewOut, ReviewSection, SpotSection
from app.schemas.review import ReviewOut
from app.schemas.spot import SpotOut
from app.services.db_client import SupabaseDBClient
from app.services.profile import build_profile_overview

router = APIRouter(
    prefix="/profile",
    tags=["profile"]
)


@router.get("/me", response_model=ProfileOverviewOut)
def read_my_profile(
    user: AuthenticatedUser = Depends(get_current_user),
    db: SupabaseDBClient = Depends(get_db),
):
    overview = build_profile_overview(
        user,
        db,
        saved_limit=settings.PROFILE_SAVED_SPOTS_LIMIT,
        reviews_limit=settings.PROFILE_REVIEWS_LIMIT,
    )
    return ProfileOverviewOut(
        user_id=user.id,
        email=user.email,
        profile=ProfileOut.model_validate(overview.profile),
        profile_error=overview.profile_error,
        spots=SpotSection(
            items=[SpotOut.model_validate(s) for s in overview.spots.items],
            error=overview.spots.error,
        ),
        saved_spots=SpotSection(
            items=[SpotOut.model_validate(s) for s in overview.saved_spots.items],
            error=overview.saved_spots.error,
        ),
        reviews=ReviewSection(
            items=[ReviewOut.model_validate(r) for r in overview.reviews.items],
            error=overview.reviews.error,
        ),
    )
