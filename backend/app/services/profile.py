"""
profile.py — Profile Overview (Composite Read)

Purpose:
- Build the "my profile" page from four independent fetches:
    * profile row (`profiles`)
    * spots the user created
    * spots the user saved
    * reviews the user wrote
- Any one fetch may fail without taking the others down: the failing
  section comes back empty with an error message.

This module does NOT:
- Retry failed sections; the client re-requests the page.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Callable, List, Optional

from app.core.errors import ServiceError
from app.core.logging import get_logger
from app.models.user import AuthenticatedUser, Profile
from app.services import reviews as review_service
from app.services import saved_spots as saved_spot_service
from app.services import spots as spot_service
from app.services.db_client import SupabaseDBClient

logger = get_logger(__name__)


@dataclass
class Section:
    items: List[Any] = field(default_factory=list)
    error: Optional[str] = None


@dataclass
class ProfileOverview:
    user: AuthenticatedUser
    profile: Profile
    profile_error: Optional[str]
    spots: Section
    saved_spots: Section
    reviews: Section


def _load_section(label: str, user: AuthenticatedUser, fetch: Callable[[], List[Any]]) -> Section:
    try:
        return Section(items=fetch())
    except ServiceError as e:
        logger.warning("Profile overview: could not load %s for user %s: %s", label, user.id, e.message)
        return Section(error=f"Could not load {label}.")


def _load_profile(user: AuthenticatedUser, db: SupabaseDBClient):
    try:
        row = db.get_profile(user.id)
    except ServiceError as e:
        logger.warning("Profile overview: could not load profile for user %s: %s", user.id, e.message)
        return Profile.fallback_for(user), "Could not load profile details."
    if row is None:
        return Profile.fallback_for(user), None
    return Profile.from_row(row), None


def build_profile_overview(
    user: AuthenticatedUser,
    db: SupabaseDBClient,
    saved_limit: Optional[int] = None,
    reviews_limit: Optional[int] = None,
) -> ProfileOverview:
    profile, profile_error = _load_profile(user, db)
    return ProfileOverview(
        user=user,
        profile=profile,
        profile_error=profile_error,
        spots=_load_section("your spots", user, lambda: spot_service.list_user_spots(user, db)),
        saved_spots=_load_section(
            "saved spots", user, lambda: saved_spot_service.list_saved_spots(user, db, limit=saved_limit)
        ),
        reviews=_load_section(
            "reviews", user, lambda: review_service.list_user_reviews(user, db, limit=reviews_limit)
        ),
    )
