"""
Supabase table helpers for spots, saved spots, reviews and profiles.

Every call goes through PostgREST; failures are logged with the operation and
target id and re-raised as StoreUnavailable so callers never see driver
details. Rows are returned as plain dicts; services convert them to records.
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from postgrest.exceptions import APIError
from postgrest.types import CountMethod
from supabase import Client

from app.core.errors import StoreUnavailable
from app.core.logging import get_logger


logger = get_logger(__name__)

SPOTS_TABLE = "spots"
SAVED_SPOTS_TABLE = "saved_spots"
REVIEWS_TABLE = "reviews"
PROFILES_TABLE = "profiles"

REVIEW_COLUMNS = "id, spot_id, user_id, rating, comment, created_at, profiles(full_name, avatar_url)"
SAVED_WITH_SPOT_COLUMNS = "id, user_id, spot_id, created_at, spots(*)"

UNIQUE_VIOLATION = "23505"


class DuplicateRecord(Exception):
    """Raised when an insert hits a unique constraint."""


class SupabaseDBClient:
    """
    Thin wrapper providing typed helpers around Supabase tables.
    """

    def __init__(self, client: Client):
        self._client = client

    def _execute(self, query, operation: str, target: Any = None):
        try:
            return query.execute()
        except Exception as e:
            logger.error("Supabase %s failed (target=%s): %s", operation, target, e)
            raise StoreUnavailable(f"Failed to {operation}.") from e

    @staticmethod
    def _first(response) -> Optional[Dict[str, Any]]:
        data = response.data or []
        return data[0] if data else None

    # ------------------------------------------------------------------ #
    # Spots
    def insert_spot(self, row: Dict[str, Any]) -> Dict[str, Any]:
        response = self._execute(
            self._client.table(SPOTS_TABLE).insert(row),
            "create spot",
            row.get("name"),
        )
        created = self._first(response)
        if created is None:
            logger.error("Supabase insert into spots returned no row (name=%s)", row.get("name"))
            raise StoreUnavailable("Failed to create spot.")
        return created

    def get_spot(self, spot_id: int) -> Optional[Dict[str, Any]]:
        response = self._execute(
            self._client.table(SPOTS_TABLE).select("*").eq("id", spot_id).limit(1),
            "fetch spot",
            spot_id,
        )
        return self._first(response)

    def list_spots(
        self,
        difficulty: Optional[str] = None,
        min_elevation: Optional[float] = None,
        max_elevation: Optional[float] = None,
    ) -> List[Dict[str, Any]]:
        query = self._client.table(SPOTS_TABLE).select("*")
        if difficulty is not None:
            query = query.eq("difficulty", difficulty)
        if min_elevation is not None:
            query = query.gte("elevation_gain", min_elevation)
        if max_elevation is not None:
            query = query.lte("elevation_gain", max_elevation)
        response = self._execute(query.order("created_at", desc=True), "list spots")
        return response.data or []

    def list_spots_by_owner(self, owner_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = (
            self._client.table(SPOTS_TABLE)
            .select("*")
            .eq("user_id", owner_id)
            .order("created_at", desc=True)
        )
        if limit is not None:
            query = query.limit(limit)
        response = self._execute(query, "list user spots", owner_id)
        return response.data or []

    def update_spot_if_owner(
        self, spot_id: int, owner_id: str, fields: Dict[str, Any]
    ) -> Optional[Dict[str, Any]]:
        """
        Single conditional UPDATE (id AND user_id). Returns the updated row,
        or None when no row matched.
        """
        response = self._execute(
            self._client.table(SPOTS_TABLE)
            .update(fields)
            .eq("id", spot_id)
            .eq("user_id", owner_id),
            "update spot",
            spot_id,
        )
        return self._first(response)

    def delete_spot_if_owner(self, spot_id: int, owner_id: str) -> Optional[int]:
        """
        Single conditional DELETE (id AND user_id) with an exact row count.
        Returns the count reported by PostgREST (None if it sent none).
        """
        response = self._execute(
            self._client.table(SPOTS_TABLE)
            .delete(count=CountMethod.exact)
            .eq("id", spot_id)
            .eq("user_id", owner_id),
            "delete spot",
            spot_id,
        )
        return response.count

    # ------------------------------------------------------------------ #
    # Saved spots
    def get_saved(self, user_id: str, spot_id: int) -> Optional[Dict[str, Any]]:
        response = self._execute(
            self._client.table(SAVED_SPOTS_TABLE)
            .select("*")
            .eq("user_id", user_id)
            .eq("spot_id", spot_id)
            .limit(1),
            "check saved status",
            spot_id,
        )
        return self._first(response)

    def insert_saved(self, user_id: str, spot_id: int) -> Dict[str, Any]:
        query = self._client.table(SAVED_SPOTS_TABLE).insert({"user_id": user_id, "spot_id": spot_id})
        try:
            response = query.execute()
        except APIError as e:
            if e.code == UNIQUE_VIOLATION:
                raise DuplicateRecord(f"spot {spot_id} already saved by {user_id}") from e
            logger.error("Supabase save spot failed (target=%s): %s", spot_id, e)
            raise StoreUnavailable("Failed to save spot.") from e
        except Exception as e:
            logger.error("Supabase save spot failed (target=%s): %s", spot_id, e)
            raise StoreUnavailable("Failed to save spot.") from e
        return self._first(response) or {"user_id": user_id, "spot_id": spot_id}

    def delete_saved(self, user_id: str, spot_id: int) -> Optional[int]:
        response = self._execute(
            self._client.table(SAVED_SPOTS_TABLE)
            .delete(count=CountMethod.exact)
            .match({"user_id": user_id, "spot_id": spot_id}),
            "unsave spot",
            spot_id,
        )
        return response.count

    def list_saved_with_spots(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """Saved pairs for a user, each with the full spot row embedded under `spots`."""
        query = (
            self._client.table(SAVED_SPOTS_TABLE)
            .select(SAVED_WITH_SPOT_COLUMNS)
            .eq("user_id", user_id)
        )
        if limit is not None:
            query = query.limit(limit)
        response = self._execute(query, "list saved spots", user_id)
        return response.data or []

    # ------------------------------------------------------------------ #
    # Reviews
    def insert_review(self, row: Dict[str, Any]) -> Dict[str, Any]:
        response = self._execute(
            self._client.table(REVIEWS_TABLE).insert(row),
            "create review",
            row.get("spot_id"),
        )
        created = self._first(response)
        if created is None:
            logger.error("Supabase insert into reviews returned no row (spot=%s)", row.get("spot_id"))
            raise StoreUnavailable("Failed to create review.")
        return created

    def get_review(self, review_id: int) -> Optional[Dict[str, Any]]:
        response = self._execute(
            self._client.table(REVIEWS_TABLE).select(REVIEW_COLUMNS).eq("id", review_id).limit(1),
            "fetch review",
            review_id,
        )
        return self._first(response)

    def list_reviews_for_spot(self, spot_id: int) -> List[Dict[str, Any]]:
        response = self._execute(
            self._client.table(REVIEWS_TABLE)
            .select(REVIEW_COLUMNS)
            .eq("spot_id", spot_id)
            .order("created_at", desc=True),
            "list reviews",
            spot_id,
        )
        return response.data or []

    def list_reviews_by_author(self, user_id: str, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        query = (
            self._client.table(REVIEWS_TABLE)
            .select(REVIEW_COLUMNS)
            .eq("user_id", user_id)
            .order("created_at", desc=True)
        )
        if limit is not None:
            query = query.limit(limit)
        response = self._execute(query, "list user reviews", user_id)
        return response.data or []

    # ------------------------------------------------------------------ #
    # Profiles
    def get_profile(self, user_id: str) -> Optional[Dict[str, Any]]:
        response = self._execute(
            self._client.table(PROFILES_TABLE).select("*").eq("id", user_id).limit(1),
            "fetch profile",
            user_id,
        )
        return self._first(response)
